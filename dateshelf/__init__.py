"""Shelve the files of a directory into YEAR/MM/kind folders."""
import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())
