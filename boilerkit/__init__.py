"""Project automation helpers for TypeScript boilerplate projects."""

__version__ = "1.0.0"
