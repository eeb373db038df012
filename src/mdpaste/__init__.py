"""mdpaste - paste markdown into Logseq as nested outline blocks."""

__version__ = "0.1.0"
