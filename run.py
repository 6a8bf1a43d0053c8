import logging
import os
import sys

from mockrest import create_app
from mockrest.config import ProdConfig
from mockrest.errors import SnapshotError


def main(argv=None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        app = create_app(ProdConfig, db_path=argv[0] if argv else None)
    except SnapshotError as e:
        logging.getLogger("mockrest").error("Error reading JSON file: %s", e)
        return 1

    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "8000"))
    debug = os.getenv("DEBUG", "false").strip().lower() in {"1", "true", "yes", "on"}
    app.logger.info("Server is running on http://%s:%s", host, port)
    app.run(host=host, port=port, debug=debug)
    return 0


if __name__ == "__main__":
    sys.exit(main())
