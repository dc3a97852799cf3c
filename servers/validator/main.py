"""Entry point for TSSchema Validator Server."""

import sys
from pathlib import Path

# Add the project root to the Python path
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root / "src"))

from tsschema.validator_server.server import main

if __name__ == "__main__":
    main()
