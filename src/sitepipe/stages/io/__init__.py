from .read import FileReader, readers_in_dir
from .write import FileWriter

__all__ = ["FileReader", "FileWriter", "readers_in_dir"]
