__version__ = "0.1.0"

from .model import OutputSpec, RepositoryReference, RunResult
from .reference import normalize
from .pipeline import run, run_batch, run_or_raise

__all__ = ["normalize", "run", "run_or_raise", "run_batch", "OutputSpec", "RepositoryReference", "RunResult", "__version__"]
