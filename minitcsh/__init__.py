"""Building blocks of a small tcsh-style shell: environment, builtins, execution, history and line editing."""

__version__ = "0.1.0"