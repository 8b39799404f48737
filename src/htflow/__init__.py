"""htflow - repair instructions from a generative-language API"""

__version__ = "0.1.0"
