"""
Annotation UI Builder

Schema-driven form builder and runtime renderer for the annotation console.
"""

__version__ = "0.1.0"
