"""
Configuration constants for the wikipaths project.

All default paths and tunable parameters are defined here. Values can be
overridden through environment variables, optionally read from a .env file
in the project root.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# Project root is parent of wikipaths/
PROJECT_ROOT = Path(__file__).parent.parent

load_dotenv(PROJECT_ROOT / ".env")

# =============================================================================
# Path Configuration
# =============================================================================

# Data directory (contains vertex list, edge list, optional snapshot)
DATA_DIR = Path(os.environ.get("WIKIPATHS_DATA_DIR", PROJECT_ROOT / "data"))

# Default source files
VERTICES_PATH = DATA_DIR / "articles.tsv"
EDGES_PATH = DATA_DIR / "links.tsv"
SNAPSHOT_PATH = DATA_DIR / "link_graph.msgpack"

# =============================================================================
# Source Format
# =============================================================================

# Lines starting with this character are ignored in vertex/edge sources
COMMENT_PREFIX = "#"

# Separator between the two names of an edge line
EDGE_SEPARATOR = "\t"

# =============================================================================
# Query Configuration
# =============================================================================

# Worker threads for batched concurrent queries
DEFAULT_MAX_WORKERS = int(os.environ.get("WIKIPATHS_MAX_WORKERS", "4"))

# =============================================================================
# CLI Configuration
# =============================================================================

# Arrow used when printing a path
PATH_SEPARATOR = " --> "

# Positional argument that requests a random waypoint
INTERMEDIATE_FLAG = "useIntermediateNode"

# Shown in place of a name that cannot be URL-decoded
DECODE_ERROR_PLACEHOLDER = "(error)"

# =============================================================================
# Logging Configuration
# =============================================================================

# Log level (DEBUG, INFO, WARNING, ERROR)
LOG_LEVEL = os.environ.get("WIKIPATHS_LOG_LEVEL", "WARNING")

# =============================================================================
# Validation Helpers
# =============================================================================

def validate_data_files() -> dict[str, bool]:
    """Check which default data files exist."""
    return {
        "vertices": VERTICES_PATH.exists(),
        "edges": EDGES_PATH.exists(),
        "snapshot": SNAPSHOT_PATH.exists(),
    }


def get_missing_data_files() -> list[str]:
    """Return list of missing data file names."""
    status = validate_data_files()
    return [name for name, exists in status.items() if not exists]
