#setup: python -m venv .venv
#setup: source .venv/bin/activate   # (windows: .venv\Scripts\activate)
#setup: pip install -U pip -e ".[test]"
#setup: flask --app satsplan.wsgi run --port 5000 --debug

import logging

from satsplan.app import create_app

logging.basicConfig(format="%(asctime)s %(levelname)s %(name)s: %(message)s")

app = create_app()


if __name__ == "__main__":
    app.run(port=5000, debug=True)
