"""
Flask-based Web API for readmegen.

Provides REST endpoints for README generation from uploaded project
archives. Each request is processed in its own temporary directory.

Endpoints:
    GET  /api/health   - Health check endpoint
    POST /api/generate - Generate a README from an uploaded zip
    POST /api/analyze  - Return the analyzed ProjectInfo without rendering
"""

import tempfile
import zipfile
from pathlib import Path
from typing import Any, Optional

from flask import Flask, Response, jsonify, request

from readmegen import __version__
from readmegen.analyzer import analyze_project
from readmegen.badges import BadgeConfig, all_badges_config, auto_badge_config
from readmegen.renderer import compose_readme
from readmegen.schema import ProjectInfo, Template
from readmegen.tree import DEFAULT_MAX_DEPTH

OUTPUT_FORMATS = ("markdown", "json", "both")
BADGE_MODES = ("none", "auto", "all")

app = Flask(__name__)
app.config["MAX_CONTENT_LENGTH"] = 50 * 1024 * 1024  # 50MB max upload


def extract_zip(zip_file, target_dir: Path) -> None:
    """
    Extract a zip file to a target directory.

    Args:
        zip_file: The uploaded zip file object.
        target_dir: The directory to extract into.

    Raises:
        ValueError: If the archive is invalid or contains unsafe paths.
    """
    try:
        with zipfile.ZipFile(zip_file, "r") as zf:
            # Reject absolute paths and parent references before extracting
            for member in zf.namelist():
                member_path = Path(member)
                if member_path.is_absolute() or ".." in member_path.parts:
                    raise ValueError(f"Invalid path in zip: {member}")
            zf.extractall(target_dir)
    except zipfile.BadZipFile:
        raise ValueError("Invalid or corrupted zip file")


def find_project_root(extracted_dir: Path) -> Path:
    """
    Find the actual project root after extraction.

    Archives downloaded from code hosts usually wrap everything in a single
    top-level directory (e.g. repo-main/); descend into it if so.
    """
    contents = list(extracted_dir.iterdir())

    if len(contents) == 1 and contents[0].is_dir():
        return contents[0]

    return extracted_dir


def _read_options() -> dict[str, Any]:
    """Collect request options from the JSON body or the query string."""
    if request.is_json:
        data = request.get_json(silent=True) or {}
    else:
        data = request.args
    return {
        "template": str(data.get("template", Template.STANDARD.value)).lower(),
        "badges": str(data.get("badges", "none")).lower(),
        "depth": data.get("depth", DEFAULT_MAX_DEPTH),
        "format": str(data.get("format", "both")).lower(),
    }


def _parse_depth(value: Any) -> int:
    try:
        depth = int(value)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid depth: {value!r}")
    if depth < 1:
        raise ValueError("Depth must be at least 1")
    return depth


def _badge_config(mode: str, info: ProjectInfo) -> Optional[BadgeConfig]:
    if mode == "auto":
        return auto_badge_config(info)
    if mode == "all":
        return all_badges_config(info.ci_provider, info.coverage_provider)
    return None


def _analyze_upload(tmpdir: str, depth: int) -> ProjectInfo:
    """
    Extract the uploaded archive and analyze it.

    Raises:
        ValueError: If no usable zip upload is present.
    """
    if "file" not in request.files:
        raise ValueError("A 'file' upload containing a .zip archive is required")

    uploaded_file = request.files["file"]
    if not uploaded_file.filename:
        raise ValueError("No file selected")
    if not uploaded_file.filename.endswith(".zip"):
        raise ValueError("Only .zip files are supported")

    project_path = Path(tmpdir) / "project"
    project_path.mkdir()
    extract_zip(uploaded_file, project_path)
    return analyze_project(find_project_root(project_path), max_depth=depth)


@app.route("/api/health", methods=["GET"])
def health_check() -> Response:
    """Health check endpoint."""
    return jsonify({"status": "healthy", "version": __version__})


@app.route("/api/generate", methods=["POST"])
def generate_readme() -> tuple[Response, int]:
    """
    Generate a README from an uploaded zip file.

    Request: multipart/form-data with a 'file' field containing a zip.

    Optional parameters (query string):
        - template: minimal | standard | detailed | comprehensive
        - badges: none | auto | all (default: none)
        - depth: project structure depth (default: 3)
        - format: markdown | json | both (default: both)

    Returns:
        JSON response with:
            - readme: The generated README content (if format includes markdown)
            - project: The analyzed project (if format includes json)
            - warnings: Any warnings from processing
    """
    options = _read_options()

    try:
        template = Template(options["template"])
    except ValueError:
        return jsonify({"error": f"Unknown template: {options['template']}"}), 400
    if options["badges"] not in BADGE_MODES:
        return jsonify({"error": f"Unknown badges mode: {options['badges']}"}), 400
    if options["format"] not in OUTPUT_FORMATS:
        return jsonify({"error": f"Unknown format: {options['format']}"}), 400

    with tempfile.TemporaryDirectory() as tmpdir:
        try:
            depth = _parse_depth(options["depth"])
            info = _analyze_upload(tmpdir, depth)
            readme = compose_readme(info, template, _badge_config(options["badges"], info))
        except ValueError as e:
            return jsonify({"error": str(e)}), 400
        except Exception as e:
            return jsonify({"error": f"Processing failed: {e}"}), 500

    response_data: dict[str, Any] = {"success": True}

    if options["format"] in ("markdown", "both"):
        response_data["readme"] = readme

    if options["format"] in ("json", "both"):
        response_data["project"] = info.to_dict()

    response_data["warnings"] = list(info.warnings)

    return jsonify(response_data), 200


@app.route("/api/analyze", methods=["POST"])
def analyze() -> tuple[Response, int]:
    """
    Analyze an uploaded zip without rendering a README.

    Useful for integrations that want to render the data themselves.
    """
    options = _read_options()

    with tempfile.TemporaryDirectory() as tmpdir:
        try:
            info = _analyze_upload(tmpdir, _parse_depth(options["depth"]))
        except ValueError as e:
            return jsonify({"error": str(e)}), 400
        except Exception as e:
            return jsonify({"error": f"Processing failed: {e}"}), 500

    return jsonify({"success": True, "project": info.to_dict()}), 200


@app.errorhandler(413)
def request_entity_too_large(error):
    """Handle file too large errors."""
    return jsonify({"error": "File too large. Maximum size is 50MB."}), 413


@app.errorhandler(500)
def internal_server_error(error):
    """Handle internal server errors."""
    return jsonify({"error": "Internal server error"}), 500


def create_app() -> Flask:
    """
    Application factory for creating the Flask app.

    Returns:
        Configured Flask application instance.
    """
    return app


def main() -> None:
    """Run the development server."""
    print("Starting readmegen API server...")
    print()
    print("API Endpoints:")
    print("  POST /api/generate - Generate README from a zip upload")
    print("  POST /api/analyze  - Get the analyzed project only")
    print("  GET  /api/health   - Health check")
    print()
    app.run(host="127.0.0.1", port=5001)


if __name__ == "__main__":
    main()
