import logging

from cavern import env
from cavern.repl.loop import main


def _setup_logging() -> None:
    if not env.logging_enabled():
        # Silence root logger and clear any default handlers when logging is disabled.
        logging.disable(logging.CRITICAL)
        logging.getLogger().handlers.clear()
        return

    level = logging.DEBUG if env.debug_enabled() else logging.INFO
    log_dir = env.state_path("logs")
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "game.log"

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        handlers=[logging.FileHandler(log_file, encoding="utf-8")],
    )


_setup_logging()

if __name__ == "__main__":
    main()
