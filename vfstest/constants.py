# Enlistment layout
SRC_DIR_NAME = "src"
CONTROL_DIR_NAME = ".gvfs"
CACHE_DIR_NAME = ".gvfsCache"
LOGS_DIR_NAME = "logs"
DIAGNOSTICS_DIR_NAME = "diagnostics"

# Cache instance layout
GIT_OBJECTS_DIR_NAME = "gitObjects"
PACK_DIR_NAME = "pack"
CACHE_ROOT_ENTRY_COUNT = 2

# Working tree layout
DOT_GIT_OBJECTS_ROOT = ".git/objects"
ROOT_GITIGNORE = ".gitignore"

# Unique root naming
ENLISTMENT_ID_LENGTH = 20
SPACED_ENLISTMENT_ID_LENGTH = 15
SPACED_ENLISTMENT_PREFIX = "test "

# Status polling (milliseconds)
STATUS_POLL_QUANTUM_MS = 100
DEFAULT_MAX_WAIT_MS = 5000
ZERO_BACKGROUND_OPERATIONS = "Background operations: 0\n"
LOCK_HELD_BY = "GVFS Lock: Held by {}"

# Post-clone identity
FUNCTIONAL_TEST_USER_NAME = "Functional Test User"
FUNCTIONAL_TEST_USER_EMAIL = "functional@test.com"
FULL_HASH_ABBREV = "40"
