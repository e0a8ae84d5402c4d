from .git import GitProcess
from .vfs import CommandResult, VFSProcess

__all__ = ["CommandResult", "GitProcess", "VFSProcess"]
