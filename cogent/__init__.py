"""Session storage, inline prompts, input history, a Linear task browser, ANSI text helpers and a splash screen for a coding agent's terminal interface."""

__version__ = "0.1.0"