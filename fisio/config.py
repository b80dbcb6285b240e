from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# Root del progetto (accanto a pyproject.toml)
PROJECT_ROOT = Path(__file__).resolve().parents[1]

DATASET_PATH = Path(os.getenv("FISIO_DATASET_PATH", str(Path(__file__).resolve().parent / "data" / "db.json")))
DATABASE_URL = os.getenv("FISIO_DATABASE_URL", f"sqlite:///{PROJECT_ROOT / 'fisio.sqlite'}")
LOG_LEVEL = os.getenv("FISIO_LOG_LEVEL", "WARNING")

# Giorno usato da `fisio patients-on` se non si passa --date
DATA_RIFERIMENTO = os.getenv("FISIO_DATA_RIFERIMENTO", "2023-04-18")
