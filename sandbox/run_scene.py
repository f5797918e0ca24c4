import os
import sys
from pathlib import Path

# --- ensure project root is importable ---
ROOT = Path(__file__).resolve().parents[1]
os.chdir(ROOT)
sys.path.insert(0, str(ROOT))

from quest.app import main


if __name__ == "__main__":
    raise SystemExit(main())
