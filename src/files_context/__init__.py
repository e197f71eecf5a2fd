"""files_context: gather a set of files into one text blob for an LLM prompt."""

__version__ = "0.1.0"
