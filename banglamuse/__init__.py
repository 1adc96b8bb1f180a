"""BanglaMuse: a Bengali creative writing studio backed by Gemini."""

__version__ = "0.1.0"
