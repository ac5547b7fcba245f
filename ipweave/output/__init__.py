"""
Output collaborators: the file sink and the syntax validator.
"""

from .sink import ArtifactWriter, WriteReport
from .validator import ScalaSyntaxValidator, SourceValidator

__all__ = ["ArtifactWriter", "WriteReport", "ScalaSyntaxValidator", "SourceValidator"]
