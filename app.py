"""
WSJF Calculator - Flask Server
Single-page Weighted Shortest Job First calculator with PDF export.
Weight changes trigger exactly one recompute; adds/deletes only re-rank.
"""
import copy
import io
import logging
import os
import threading
from flask import Flask, jsonify, request, render_template, redirect, url_for, send_file
from engines.scoring import (
    default_weights, weight_rows, LABELS, SCORE_FIELDS, WEIGHT_FIELDS,
)
from engines.initiatives import add_initiative, delete_initiative, recompute, summarize
from engines.inputs import (
    InputError, parse_initiative, parse_weight_update, FORM_DEFAULT,
    SCORE_RANGE, JOB_SIZE_RANGE,
)

app = Flask(__name__)

STATE = {
    'weights': default_weights(),
    'initiatives': [],
    'exporting': False,
}
# every handler touches STATE only while holding this
STATE_LOCK = threading.Lock()


def _reset_state():
    STATE['weights'] = default_weights()
    STATE['initiatives'] = []
    STATE['exporting'] = False


def _body():
    """JSON body for API calls, form fields for the no-JS page."""
    if request.is_json:
        body = request.get_json(force=True)
        if body is None:
            return {}
        if not isinstance(body, dict):
            raise InputError('Request body must be a JSON object')
        return body
    return request.form.to_dict()


def _wants_page():
    return not request.is_json and bool(request.form)


def _payload():
    return {
        'initiatives': STATE['initiatives'],
        'weights': STATE['weights'],
        'summary': summarize(STATE['initiatives']),
    }


@app.errorhandler(InputError)
def _input_error(e):
    return jsonify({'error': str(e)}), 400


# ══════════════════════════════════════════════════════════════
#  ROUTES
# ══════════════════════════════════════════════════════════════

@app.route('/')
def index():
    with STATE_LOCK:
        return render_template(
            'index.html',
            weight_inputs=[(f, label, value) for f, (label, value)
                           in zip(WEIGHT_FIELDS, weight_rows(STATE['weights']))],
            initiatives=STATE['initiatives'], summary=summarize(STATE['initiatives']),
            score_fields=SCORE_FIELDS, labels=LABELS, form_default=FORM_DEFAULT,
            score_range=SCORE_RANGE, job_size_range=JOB_SIZE_RANGE,
            error=request.args.get('error'),
        )


@app.route('/api/initiatives')
def api_initiatives():
    with STATE_LOCK:
        return jsonify(_payload())


@app.route('/api/initiative/add', methods=['POST'])
def api_add_initiative():
    body = _body()
    try:
        raw = parse_initiative(body)
    except InputError as e:
        if _wants_page():
            return redirect(url_for('index', error=str(e)))
        return jsonify({'error': str(e)}), 400

    with STATE_LOCK:
        init = add_initiative(STATE['initiatives'], raw, STATE['weights'])
        if _wants_page():
            return redirect(url_for('index'))
        return jsonify({'status': 'ok', 'initiative': init, **_payload()})


@app.route('/api/initiative/delete', methods=['POST'])
def api_delete_initiative():
    body = _body()
    init_id = body.get('id')
    if not init_id:
        return jsonify({'error': 'id required'}), 400

    with STATE_LOCK:
        deleted = delete_initiative(STATE['initiatives'], init_id)
        if _wants_page():
            return redirect(url_for('index'))
        return jsonify({'status': 'ok', 'deleted': deleted, **_payload()})


@app.route('/api/weights', methods=['POST'])
def api_weights():
    """Replace one or more weight fields, then recompute every initiative once."""
    body = _body()
    if _wants_page():
        body = {'weights': {k: v for k, v in body.items() if k in WEIGHT_FIELDS}}
    updates = parse_weight_update(body)

    with STATE_LOCK:
        STATE['weights'].update(updates)
        recompute(STATE['initiatives'], STATE['weights'])
        if _wants_page():
            return redirect(url_for('index'))
        return jsonify({'status': 'ok', **_payload()})


@app.route('/api/refresh', methods=['POST'])
def api_refresh():
    """Fresh start: default weights, empty initiative list."""
    with STATE_LOCK:
        _reset_state()
        logging.info('State reset to defaults')
        if _wants_page():
            return redirect(url_for('index'))
        return jsonify({'status': 'ok', 'message': 'Weights reset and initiatives cleared', **_payload()})


@app.route('/api/export')
def api_export():
    """Export the ranked initiatives to a PDF report."""
    with STATE_LOCK:
        if STATE['exporting']:
            return jsonify({'error': 'An export is already in progress'}), 409
        if not STATE['initiatives']:
            return jsonify({'error': 'No initiatives to export. Add at least one initiative first.'}), 400
        STATE['exporting'] = True
        # snapshot at click time
        initiatives = copy.deepcopy(STATE['initiatives'])
        weights = dict(STATE['weights'])

    try:
        from engines.report import build_report_pdf, report_filename, ReportError

        tabular = request.args.get('layout', 'table') != 'text'
        try:
            pdf = build_report_pdf(initiatives, weights, tabular=tabular)
        except ReportError as e:
            return jsonify({'error': str(e)}), 400

        logging.info(f"Exported {len(initiatives)} initiative(s) to PDF ({len(pdf)} bytes)")
        return send_file(io.BytesIO(pdf), mimetype='application/pdf',
                         as_attachment=True, download_name=report_filename())

    except ImportError:
        return jsonify({'error': 'PDF export unavailable: reportlab not installed'}), 500
    except Exception as e:
        logging.exception("PDF export failed")
        return jsonify({'error': f"PDF export failed: {e}"}), 500
    finally:
        with STATE_LOCK:
            STATE['exporting'] = False


if __name__ == '__main__':
    logging.basicConfig(level=os.environ.get('LOG_LEVEL', 'INFO'),
                        format='%(asctime)s %(levelname)s %(message)s')
    app.run(debug=False, host=os.environ.get('HOST', '0.0.0.0'),
            port=int(os.environ.get('PORT', 5000)))
