import logging
import os

from flask import Blueprint, Flask, current_app, jsonify, render_template_string, request
from werkzeug.exceptions import HTTPException

from .errors import FileMissing, InvalidPath, InvalidRequest, MdviewerError, NotMarkdownFile
from .listing import list_markdown_files
from .metadata import TAG_ORDER, VALID_TAGS, MetadataStore
from .paths import is_markdown_file, sanitize_relative_path, secure_join
from .render import render_markdown
from .search import search_files
from .template import MAIN_TEMPLATE

logger = logging.getLogger(__name__)

bp = Blueprint("mdviewer", __name__)


def _root() -> str:
    return current_app.config["MDVIEWER_ROOT"]


def _store() -> MetadataStore:
    return MetadataStore(_root(), current_app.config["MDVIEWER_VALID_TAGS"])


def _json_body() -> dict:
    body = request.get_json(force=True, silent=True)
    if not isinstance(body, dict):
        raise InvalidRequest()
    return body


def _string_field(body: dict, name: str) -> str:
    value = body.get(name, "")
    if value is None:
        return ""
    if not isinstance(value, str):
        raise InvalidRequest()
    return value


def _markdown_rel_path(raw_path: str, not_markdown_message: str | None = None) -> str:
    rel_path = sanitize_relative_path(raw_path)
    if not is_markdown_file(rel_path):
        raise NotMarkdownFile(not_markdown_message)
    return rel_path


def _read_markdown(rel_path: str) -> str:
    full_path = secure_join(_root(), rel_path)
    try:
        with open(full_path, "rb") as f:
            raw = f.read()
    except FileNotFoundError:
        raise FileMissing()
    except OSError:
        logger.exception("Failed to read %s", rel_path)
        raise MdviewerError("failed to read file")
    return raw.decode("utf-8", errors="replace")


@bp.route("/")
def index():
    initial_file = request.args.get("file", "")
    try:
        sanitize_relative_path(initial_file)
    except InvalidPath:
        initial_file = ""
    return render_template_string(
        MAIN_TEMPLATE,
        root=_root(),
        initial_file=initial_file,
        tag_order=list(TAG_ORDER),
    )


@bp.route("/api/files", methods=["GET"])
def api_files():
    try:
        files = list_markdown_files(_root())
    except OSError:
        logger.exception("Failed to list markdown files")
        raise MdviewerError("failed to list markdown files")
    return jsonify({"root": _root(), "files": files})


@bp.route("/api/file", methods=["GET"])
def api_file():
    rel_path = _markdown_rel_path(request.args.get("path", ""))
    return jsonify({"path": rel_path, "content": _read_markdown(rel_path)})


@bp.route("/api/render", methods=["GET"])
def api_render():
    rel_path = _markdown_rel_path(request.args.get("path", ""))
    return jsonify({"path": rel_path, "html": render_markdown(_read_markdown(rel_path))})


@bp.route("/api/search", methods=["GET"])
def api_search():
    query = request.args.get("q", "").strip()
    if not query:
        raise InvalidRequest("missing query parameter 'q'")
    try:
        results = search_files(_root(), query)
    except OSError:
        logger.exception("Search for %r failed", query)
        raise MdviewerError("search failed")
    return jsonify({"query": query, "results": [hit.to_dict() for hit in results]})


@bp.route("/api/tags", methods=["GET"])
def api_tags():
    try:
        data = _store().collect_all()
    except OSError:
        logger.exception("Failed to collect tags")
        raise MdviewerError("failed to read tags")
    return jsonify({
        "tags": {path: data.tags[path] for path in sorted(data.tags)},
        "opened": {path: data.opened[path] for path in sorted(data.opened)},
    })


@bp.route("/api/tag", methods=["POST"])
def api_set_tag():
    body = _json_body()
    raw_path = _string_field(body, "path")
    tag = _string_field(body, "tag")
    action = _string_field(body, "action")
    rel_path = _markdown_rel_path(raw_path, "only markdown files can be tagged")
    try:
        _store().set_tag(rel_path, tag, action)
    except OSError:
        logger.exception("Failed to update tags for %s", rel_path)
        raise MdviewerError("failed to write tags")
    return jsonify({"ok": True})


@bp.route("/api/opened", methods=["POST"])
def api_mark_opened():
    body = _json_body()
    rel_path = _markdown_rel_path(_string_field(body, "path"), "only markdown files supported")
    try:
        _store().mark_opened(rel_path)
    except OSError:
        logger.exception("Failed to mark %s as opened", rel_path)
        raise MdviewerError("failed to write data")
    return jsonify({"ok": True})


@bp.route("/api/archive", methods=["POST"])
def api_archive():
    body = _json_body()
    files = body.get("files")
    if files is None:
        files = []
    if not isinstance(files, list):
        raise InvalidRequest()
    return jsonify({"moved": _store().archive(files)})


@bp.route("/api/health", methods=["GET"])
def api_health():
    return jsonify({"status": "ok"})


def _handle_mdviewer_error(err: MdviewerError):
    if isinstance(err, InvalidPath):
        logger.warning("Rejected path on %s %s (%s)", request.method, request.path, type(err).__name__)
    return jsonify({"error": err.message}), err.status_code


def _handle_http_error(err: HTTPException):
    if not request.path.startswith("/api/"):
        return err
    return jsonify({"error": err.description}), err.code


def _handle_unexpected(err: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.path)
    return jsonify({"error": "internal server error"}), 500


def create_app(root, valid_tags=VALID_TAGS) -> Flask:
    app = Flask(__name__)
    app.config["MDVIEWER_ROOT"] = os.path.abspath(root)
    app.config["MDVIEWER_VALID_TAGS"] = frozenset(valid_tags)
    app.json.sort_keys = False
    app.json.ensure_ascii = False
    app.json.mimetype = "application/json; charset=utf-8"
    app.register_blueprint(bp)
    app.register_error_handler(MdviewerError, _handle_mdviewer_error)
    app.register_error_handler(HTTPException, _handle_http_error)
    app.register_error_handler(Exception, _handle_unexpected)
    return app
