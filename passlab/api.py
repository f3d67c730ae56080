import logging
import math

from flask import Flask, jsonify, request

from .crack_time import SCENARIOS, custom_scenario, estimate, get_scenario
from .evaluator import AnalysisEngine
from .wordlist import default_store

logger = logging.getLogger(__name__)

app = Flask(__name__)

_plain_engine = AnalysisEngine()
_wordlist_engine = AnalysisEngine(wordlist=default_store())


def _bad_request(message):
    return jsonify({"error": message}), 400


@app.route('/')
def home():
    return jsonify({
        "message": "PassLab API is running. Nothing you send is stored."
    })


@app.route('/scenarios', methods=['GET'])
def scenarios_route():
    return jsonify([s.to_dict() for s in SCENARIOS.values()])


@app.route('/analyze', methods=['POST'])
def analyze_route():
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        return _bad_request("expected a JSON object")
    password = data.get('password', '')
    if not isinstance(password, str):
        return _bad_request("'password' must be a string")
    use_wordlist = data.get('use_wordlist', False)
    if not isinstance(use_wordlist, bool):
        return _bad_request("'use_wordlist' must be true or false")
    engine = _wordlist_engine if use_wordlist else _plain_engine
    result = engine.analyze(password)
    body = result.to_dict()
    body["estimates"] = {
        s.id: estimate(result.entropy_bits, s).to_dict() for s in SCENARIOS.values()
    }
    return jsonify(body)


@app.route('/estimate', methods=['POST'])
def estimate_route():
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        return _bad_request("expected a JSON object")
    bits = data.get('entropy_bits')
    if isinstance(bits, bool) or not isinstance(bits, (int, float)):
        return _bad_request("'entropy_bits' must be a number")
    try:
        bits = float(bits)
    except OverflowError:
        # past float range; saturate
        bits = math.inf
    if math.isnan(bits):
        return _bad_request("'entropy_bits' must be a number")
    if not isinstance(data.get('scenario') or '', str):
        return _bad_request("'scenario' must be a scenario id")
    try:
        if data.get('guesses_per_second') is not None:
            scenario = custom_scenario(data['guesses_per_second'])
        else:
            scenario = get_scenario(data.get('scenario') or 'offlineModerate')
    except KeyError as e:
        return _bad_request(e.args[0])
    except (TypeError, ValueError) as e:
        logger.debug("rejected estimate request: %s", e)
        return _bad_request("'guesses_per_second' must be a positive number")
    body = estimate(bits, scenario).to_dict()
    body["scenario"] = scenario.to_dict()
    return jsonify(body)


if __name__ == "__main__":
    app.run(debug=True)
