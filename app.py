import os

from flask import Flask, jsonify

from tinydb import TinyDB
from tinydb.storages import MemoryStorage

from pcs.config import DEFAULT_CONFIG, load_config
from pcs.log import setup_basic_logger

from asvc_routes import asvc_bp, init_asvc_bp


def open_db(db_path):
    if db_path is None:
        return TinyDB(storage=MemoryStorage)  # Memory DB
    return TinyDB(db_path)                    # Storage DB


def create_app(config=None):
    """
    Flask 앱을 만든다.

    config가 None이면 PCS_CONFIG 환경변수가 가리키는 JSON 파일을
    DEFAULT_CONFIG 위에 병합해 쓴다 (없으면 기본값).
    """
    if config is None:
        path = os.environ.get("PCS_CONFIG")
        config = load_config(path) if path else dict(DEFAULT_CONFIG)

    for name in ("pcs", "asvc_routes"):
        setup_basic_logger(name, config["log_level"])

    app = Flask(__name__)
    app.secret_key = config["secret_key"]
    app.config["PCS"] = config

    db = open_db(config["db_path"])
    app.config["DB"] = db
    init_asvc_bp(db)
    app.register_blueprint(asvc_bp)

    @app.route("/")
    def index():
        return jsonify({
            "service": "kzg-asvc-study",
            "endpoints": sorted(
                str(rule) for rule in app.url_map.iter_rules() if rule.endpoint.startswith("asvc.")
            ),
        })

    return app


if __name__ == "__main__":
    create_app().run(debug=True)
