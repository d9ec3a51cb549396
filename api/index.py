"""
Vercel serverless entrypoint.

Re-exports the FastAPI app so the platform serves the same middleware stack
used when running locally with uvicorn.
"""

from pathlib import Path
import sys

project_root = Path(__file__).resolve().parents[1]
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from clinic_cms.app import app  # noqa: E402

__all__ = ["app"]
