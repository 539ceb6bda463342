import sys
from pathlib import Path

from dotenv import load_dotenv


# Ensure the src/ directory is on sys.path so `rdnsmigrate` can be imported
BASE_DIR = Path(__file__).resolve().parent
SRC_DIR = BASE_DIR / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

# Load .env from project root so DSN and AWS credentials are set.
load_dotenv(BASE_DIR / ".env")


if __name__ == "__main__":
    from rdnsmigrate.main import cli

    cli(prog_name="rdns-migrate")
