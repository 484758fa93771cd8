import logging, sys, pathlib
from loanfinder.config import load_settings
from loanfinder.log_setup import setup_logging
from loanfinder.storage import DuckDBStore

logger = logging.getLogger("loanfinder.init_duckdb")

def main():
    settings = load_settings()
    setup_logging(settings.log_level)
    args = [a for a in sys.argv[1:] if not a.startswith("--")]
    db_path = pathlib.Path(args[0]) if args else settings.duckdb_path

    # Creates the kv_store table if missing
    store = DuckDBStore(db_path)
    if "--reset" in sys.argv:
        removed = store.purge()
        logger.info("Cleared saved results", extra={"path": db_path.as_posix(), "rows": removed})

    logger.info("DuckDB store ready", extra={"path": db_path.as_posix()})

if __name__ == "__main__":
    main()
