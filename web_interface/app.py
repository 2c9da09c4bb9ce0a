"""
Flask web interface for the Flow Editor Core.

This provides the REST API the browser editor calls for palette entries,
context pad actions, connection checks and node rendering.
"""

from flask import Flask, request, jsonify, Response
from flask_cors import CORS
from typing import Optional
import logging

from flow_editor_core.config import EditorSettings
from flow_editor_core.exceptions import FlowEditorError, UnknownNodeError, UnknownToolError
from flow_editor_core.modeler import FlowModeler


logger = logging.getLogger(__name__)


def _bad_body():
    return jsonify({'success': False, 'error': 'malformed JSON request body'}), 400


def _connection_ends():
    """Read the {source, target} ids of a connection request, or None if malformed."""
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        return None
    ends = (data.get('source'), data.get('target'))
    if any(end is not None and not isinstance(end, str) for end in ends):
        return None
    return ends


def create_app(settings: Optional[EditorSettings] = None) -> Flask:
    """Build the Flask app around a fresh modeler."""
    settings = settings or EditorSettings.from_env()

    app = Flask(__name__)
    app.config['EDITOR_SETTINGS'] = settings
    CORS(app)

    modeler = FlowModeler(settings)
    app.extensions['flow_modeler'] = modeler

    @app.errorhandler(UnknownNodeError)
    def handle_unknown_node(error):
        return jsonify({'success': False, 'error': str(error)}), 404

    @app.errorhandler(UnknownToolError)
    def handle_unknown_tool(error):
        return jsonify({'success': False, 'error': str(error)}), 404

    @app.errorhandler(FlowEditorError)
    def handle_editor_error(error):
        return jsonify({'success': False, 'error': str(error)}), 400

    @app.route('/api/palette', methods=['GET'])
    def get_palette():
        """Get the palette entries in display order."""
        entries = modeler.palette_entries()
        return jsonify({
            'success': True,
            'data': [dict(id=entry_id, **entry.to_dict()) for entry_id, entry in entries.items()]
        })

    @app.route('/api/palette/<tool_id>', methods=['POST'])
    def trigger_palette_entry(tool_id):
        """Run a create entry at the posted canvas position."""
        data = request.get_json(silent=True) or {}
        if not isinstance(data, dict):
            return _bad_body()
        try:
            x = float(data.get('x', 0.0))
            y = float(data.get('y', 0.0))
        except (TypeError, ValueError):
            return jsonify({'success': False, 'error': 'x and y must be numbers'}), 400

        node = modeler.create_node(tool_id, x, y)
        return jsonify({'success': True, 'data': node.to_dict()}), 201

    @app.route('/api/tools/global-connect', methods=['POST'])
    def toggle_global_connect():
        """Toggle the global connect tool."""
        active = modeler.palette.trigger('tool-global-connect')
        return jsonify({'success': True, 'data': {'active': active}})

    @app.route('/api/nodes', methods=['GET'])
    def get_nodes():
        """Get all nodes and connections on the diagram."""
        return jsonify({'success': True, 'data': modeler.diagram.to_dict()})

    @app.route('/api/nodes/<node_id>', methods=['DELETE'])
    def delete_node(node_id):
        node = modeler.diagram.remove_node(node_id)
        return jsonify({'success': True, 'data': node.to_dict()})

    @app.route('/api/nodes/<node_id>/context-pad', methods=['GET'])
    def get_context_pad(node_id):
        """Get the context actions offered for a node."""
        entries = modeler.context_pad_entries(node_id)
        return jsonify({'success': True, 'data': entries})

    @app.route('/api/nodes/<node_id>/render', methods=['GET'])
    def render_node(node_id):
        """Render a node as a standalone SVG document."""
        return Response(modeler.render_svg(node_id), mimetype='image/svg+xml')

    @app.route('/api/nodes/<node_id>/path', methods=['GET'])
    def get_shape_path(node_id):
        return jsonify({'success': True, 'data': {'path': modeler.shape_path(node_id)}})

    @app.route('/api/connections/validate', methods=['POST'])
    def validate_connection():
        """Check a prospective connection without committing it."""
        ends = _connection_ends()
        if ends is None:
            return _bad_body()
        verdict = modeler.check_connection(*ends)
        return jsonify({'success': True, 'data': verdict.to_dict()})

    @app.route('/api/connections', methods=['POST'])
    def create_connection():
        """Run a connect gesture; rejected gestures leave the diagram unchanged."""
        ends = _connection_ends()
        if ends is None:
            return _bad_body()
        connection, verdict = modeler.connect(*ends)
        if not verdict.accepted:
            return jsonify({'success': False, 'error': verdict.message,
                            'data': verdict.to_dict()}), 409
        if connection is None:
            return jsonify({'success': False, 'error': 'source and target are required',
                            'data': verdict.to_dict()}), 400
        return jsonify({'success': True, 'data': connection.to_dict()}), 201

    return app


if __name__ == '__main__':
    settings = EditorSettings.from_env()
    settings.configure_logging()

    app = create_app(settings)
    logger.info("Access the flow editor API at: http://localhost:%d", settings.port)
    app.run(debug=settings.debug, host=settings.host, port=settings.port)
