"""Allow ``python -m extraction_indexer``."""

from extraction_indexer.main import run

if __name__ == "__main__":
    run()
