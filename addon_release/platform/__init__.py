"""Process, filesystem and document I/O boundary."""

from .files import atomic_write_text, copy_directory, make_temp_dir, sorted_file_names
from .process import ProcessError, run
from .yaml_io import DocumentError, dump_yaml, load_yaml_mapping, write_yaml_mapping

__all__ = [
    "DocumentError",
    "ProcessError",
    "atomic_write_text",
    "copy_directory",
    "dump_yaml",
    "load_yaml_mapping",
    "make_temp_dir",
    "run",
    "sorted_file_names",
    "write_yaml_mapping",
]
