# =============================================================================
# server.py — Dashboard HTTP API (Flask)
# =============================================================================
#
# Thin request/response layer over NPM / NSM / NViz / NCM.  Every request
# reads and parses its file afresh; no state is held between requests.
#
# Routes
# ------
#   GET  /api/time-sliced-data   basic scheme, padded to MAX_DEVICES
#   GET  /api/timeSlicedData     rich scheme + brain pair + stats for every pair
#   GET  /api/brain-data         logic_data.txt snapshot
#   GET  /api/phaseData          phase_data.txt
#   GET  /api/scene              sphere scene for ?device=&slice=
#   GET  /api/load-config        ?path=
#   POST /api/save-config        {"filePath": ..., "content": ...}
#   GET  /api/health
#
# Error bodies carry a fixed message only: no stack trace, no exception text,
# no server-side paths.  Anything a route does not catch is logged and
# answered as JSON 500.
# =============================================================================

import os
from datetime import datetime, timezone

from flask import Flask, request, jsonify
from werkzeug.exceptions import HTTPException, MethodNotAllowed

from NTE.NMM.constants import (
    NUM_SLICES, SCHEME_BASIC, SCHEME_RICH, DEFAULT_SCAN_INTERVAL_MS,
    TIME_SLICED_FILE, LOGIC_DATA_FILE, PHASE_DATA_FILE,
)
from NTE.NPM.telemetry_parser import parse_time_sliced_file, pad_devices
from NTE.NPM.logic_parser import parse_logic_file
from NTE.NPM.phase_parser import parse_phase_file
from NTE.NSM.pair_stats import (
    select_brain_pair, pair_statistics, all_pair_statistics, device_statistics,
)
from NTE.NCM.config_store import ConfigStore, ConfigError, ConfigRequestError
from NTE.NViz.scene_bridge import scene_from_device


DEFAULT_DATA_DIR = os.path.join("public", "data")


def _now_iso():
    return datetime.now(timezone.utc).isoformat()


def create_app(data_dir=None, config_root=None):
    """
    Build the dashboard app.

    Args:
        data_dir:    directory holding the telemetry .txt files
        config_root: the only directory configuration may be read from or
                     written to (defaults to data_dir)
    """
    app = Flask(__name__)
    app.config["NTE_DATA_DIR"] = os.path.abspath(data_dir or DEFAULT_DATA_DIR)
    app.config["NTE_CONFIG_ROOT"] = os.path.abspath(config_root or app.config["NTE_DATA_DIR"])

    def data_path(name):
        return os.path.join(app.config["NTE_DATA_DIR"], name)

    def config_store():
        return ConfigStore(app.config["NTE_CONFIG_ROOT"])

    def missing(name):
        app.logger.warning("Telemetry file not found: %s", data_path(name))
        return jsonify({'error': f'Data file not found: {name}'}), 404

    # ── Error handling ───────────────────────────────────────────────────────

    @app.errorhandler(ConfigError)
    def config_error(e):
        app.logger.warning("Config request rejected (%d): %s", e.status, e.message)
        body = e.to_dict()
        body['error'] = e.message
        return jsonify(body), e.status

    @app.errorhandler(MethodNotAllowed)
    def method_not_allowed(e):
        return jsonify({'message': 'Method not allowed'}), 405

    @app.errorhandler(Exception)
    def unexpected_error(e):
        if isinstance(e, HTTPException):
            return jsonify({'error': e.description}), e.code
        app.logger.exception("Unhandled error on %s", request.path)
        return jsonify({'error': 'Internal server error'}), 500

    # ── Telemetry ────────────────────────────────────────────────────────────

    @app.route('/api/time-sliced-data', methods=['GET'])
    def time_sliced_data():
        path = data_path(TIME_SLICED_FILE)
        if not os.path.exists(path):
            return missing(TIME_SLICED_FILE)
        try:
            result = parse_time_sliced_file(path, scheme=SCHEME_BASIC)
        except (OSError, UnicodeDecodeError) as e:
            app.logger.error("Error processing time-sliced data: %s", e)
            return jsonify({'error': 'Failed to process data'}), 500
        if result.skipped_lines:
            app.logger.info("Skipped %d telemetry line(s): %s",
                            result.skipped_lines, result.skipped_reasons)
        return jsonify([d.to_dict() for d in pad_devices(result.devices)])

    @app.route('/api/timeSlicedData', methods=['GET'])
    def time_sliced_pairs():
        path = data_path(TIME_SLICED_FILE)
        if not os.path.exists(path):
            return missing(TIME_SLICED_FILE)
        try:
            result = parse_time_sliced_file(path, scheme=SCHEME_RICH)
        except (OSError, UnicodeDecodeError) as e:
            app.logger.error("Error loading brain data: %s", e)
            return jsonify({'error': 'Failed to load brain data'}), 500

        def brain(d):
            if d is None:
                return None
            body = d.to_dict()
            body['scanInterval'] = DEFAULT_SCAN_INTERVAL_MS
            return body

        first, second = select_brain_pair(result.devices)
        stats = pair_statistics(first, second).to_dict() if first is not None else None
        return jsonify({
            'allBrainData': [brain(d) for d in result.devices],
            'brainPair': [brain(d) for d in (first, second)],
            'pairStats': stats,
            'allPairStats': [s.to_dict() for s in all_pair_statistics(result.devices)],
            'deviceStats': [device_statistics(d) for d in result.devices],
            'skippedLines': result.skipped_lines,
        })

    @app.route('/api/brain-data', methods=['GET'])
    def brain_data():
        path = data_path(LOGIC_DATA_FILE)
        if not os.path.exists(path):
            return missing(LOGIC_DATA_FILE)
        try:
            devices = parse_logic_file(path)
        except (OSError, UnicodeDecodeError) as e:
            app.logger.error("Error reading logic data: %s", e)
            return jsonify({'error': 'Could not read data file'}), 500
        return jsonify({
            'timestamp': _now_iso(),
            'brainData': [d.to_dict() for d in devices],
            'source': 'file',
        })

    @app.route('/api/phaseData', methods=['GET'])
    def phase_data():
        path = data_path(PHASE_DATA_FILE)
        if not os.path.exists(path):
            return missing(PHASE_DATA_FILE)
        try:
            devices = parse_phase_file(path)
        except (OSError, UnicodeDecodeError) as e:
            app.logger.error("Error loading phase data: %s", e)
            return jsonify({'error': 'Failed to load phase data'}), 500
        resp = jsonify([d.to_dict() for d in devices])
        resp.headers['Cache-Control'] = 'no-store'
        return resp

    @app.route('/api/scene', methods=['GET'])
    def scene():
        device_id = request.args.get('device', 0, type=int)
        slice_index = request.args.get('slice', 0, type=int)
        if not 0 <= slice_index < NUM_SLICES:
            return jsonify({'error': f'slice must be 0..{NUM_SLICES - 1}'}), 400

        path = data_path(TIME_SLICED_FILE)
        if not os.path.exists(path):
            return missing(TIME_SLICED_FILE)
        try:
            result = parse_time_sliced_file(path, scheme=SCHEME_BASIC)
        except (OSError, UnicodeDecodeError) as e:
            app.logger.error("Error building scene: %s", e)
            return jsonify({'error': 'Failed to build scene'}), 500
        devices = {d.id: d for d in pad_devices(result.devices)}
        if device_id not in devices:
            return jsonify({'error': f'unknown device {device_id}'}), 404

        body = scene_from_device(devices[device_id], slice_index).to_dict()
        body['device'] = device_id
        body['slice'] = slice_index
        return jsonify(body)

    # ── Configuration ────────────────────────────────────────────────────────

    @app.route('/api/load-config', methods=['GET'])
    def load_config():
        path = request.args.get('path')
        app.logger.info("Loading configuration from: %s", path)
        try:
            return jsonify(config_store().load(path))
        except (OSError, UnicodeDecodeError) as e:
            app.logger.error("Error loading configuration: %s", e)
            return jsonify({'message': 'Error loading configuration', 'error': 'Failed to read configuration file'}), 500

    @app.route('/api/save-config', methods=['POST'])
    def save_config():
        payload = request.get_json(silent=True)
        if not isinstance(payload, dict):
            raise ConfigRequestError("Request body must be a JSON object with filePath and content")
        file_path = payload.get('filePath')
        content = payload.get('content')
        app.logger.info("Saving configuration to: %s (%d chars)",
                        file_path, len(content) if isinstance(content, str) else 0)
        try:
            return jsonify(config_store().save(file_path, content))
        except OSError as e:
            app.logger.error("Error saving configuration: %s", e)
            return jsonify({'message': 'Error saving configuration', 'error': 'Failed to write configuration file'}), 500

    @app.route('/api/health', methods=['GET'])
    def health():
        return jsonify({'status': 'ok'})

    return app
