"""Entry point for the Kindgraph Type Server."""

import sys
from pathlib import Path

# Add src to the Python path so the server runs from a checkout
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root / "src"))

from kindgraph.type_server.server import main

if __name__ == "__main__":
    main()
