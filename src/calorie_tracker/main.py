"""Run the calorie tracker API locally."""

import uvicorn

from calorie_tracker.api.app import create_app
from calorie_tracker.containers import build_container


def main() -> None:
    """Serve the API on the configured host and port."""
    container = build_container()
    app = create_app(container)
    uvicorn.run(app, host=container.settings.host, port=container.settings.port)


if __name__ == "__main__":
    main()
