"""Generate structured documentation for GitHub repositories from their file trees."""

from .analyzers import HeuristicAnalyzer, analyze_repository
from .errors import RepoDocError
from .models import FileRef, GenerationResult, RepoAnalysis, RepositorySnapshot
from .orchestrator import Orchestrator
from .schemas import GeneratedDocumentation, validate_documentation
from .synthesizer import DocumentationSynthesizer

__version__ = "0.1.0"

__all__ = [
    "DocumentationSynthesizer",
    "FileRef",
    "GeneratedDocumentation",
    "GenerationResult",
    "HeuristicAnalyzer",
    "Orchestrator",
    "RepoAnalysis",
    "RepoDocError",
    "RepositorySnapshot",
    "analyze_repository",
    "validate_documentation",
]
