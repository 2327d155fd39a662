import os
from typing import List


def list_files_recursively(root: str) -> List[str]:
    """List all files under a directory, recursively.

    Args:
        root: Directory to start from

    Returns:
        list: Sorted absolute paths of every regular file below root
    """
    root = os.path.abspath(root)
    files = []
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames.sort()
        for filename in filenames:
            files.append(os.path.join(dirpath, filename))
    files.sort()
    return files
