import sys
from pathlib import Path

import matplotlib

matplotlib.use("Agg")

sys.path.append(str(Path(__file__).resolve().parents[1]))
