"""Flask web application for Gift Scout."""

import logging
import math
import os

from flask import Flask, request, jsonify
from werkzeug.exceptions import HTTPException, RequestEntityTooLarge

import config
from src.gift_agent import recommend_gifts, research_profile
from src.services.profile_service import ProfileServiceError, normalize_username

logger = logging.getLogger(__name__)

app = Flask(__name__)
app.config['MAX_CONTENT_LENGTH'] = config.MAX_UPLOAD_MB * 1024 * 1024

# Multipart field holding the profile grid screenshot
IMAGE_FIELD = 'instagram-grid'


def _parse_number(value):
    """Parse a form value as a finite number; None when missing or invalid."""
    if value is None:
        return None
    try:
        number = float(str(value).strip() or 0)
    except ValueError:
        return None
    if not math.isfinite(number):
        return None
    return number


@app.errorhandler(RequestEntityTooLarge)
def handle_too_large(e):
    return jsonify({'error': 'Uploaded file is too large'}), 413


@app.route('/api/health', methods=['GET'])
def health():
    return jsonify({'status': 'ok'})


@app.route('/api/gifts', methods=['POST'])
def api_gifts():
    """Generate gift recommendations from age, budget and an optional profile image."""
    try:
        age = _parse_number(request.form.get('age'))
        budget = _parse_number(request.form.get('budget'))
        image_file = request.files.get(IMAGE_FIELD)
        image_url = (request.form.get('image_url') or '').strip() or None

        has_image = bool(image_file and image_file.filename)
        logger.info("[api] gifts request age=%s budget=%s has_image=%s image_url=%s",
                    age, budget, has_image, bool(image_url))

        if not age or not budget:
            return jsonify({'error': 'Missing required fields'}), 400

        image_bytes = image_file.read() if has_image else None

        result = recommend_gifts(
            age,
            budget,
            image_bytes=image_bytes,
            image_url=image_url,
        )
        return jsonify(result.to_dict())

    except HTTPException:
        raise
    except Exception:
        logger.exception("[api] gifts error")
        return jsonify({'error': 'Failed to get gift recommendations'}), 500


@app.route('/api/instagram', methods=['POST'])
def api_instagram():
    """Scrape an Instagram profile and return its analysis and interests."""
    try:
        data = request.get_json(silent=True) or {}
        raw_username = data.get('username') if isinstance(data, dict) else None

        if not raw_username or not str(raw_username).strip():
            return jsonify({'error': 'Username is required'}), 400

        try:
            username = normalize_username(str(raw_username))
        except ProfileServiceError:
            return jsonify({'error': 'Invalid username'}), 400

        result = research_profile(username)
        if result is None:
            return jsonify({'error': 'Failed to fetch Instagram data'}), 404

        return jsonify(result)

    except Exception:
        logger.exception("[api] instagram error")
        return jsonify({'error': 'Failed to fetch Instagram data'}), 500


if __name__ == '__main__':
    logging.basicConfig(
        level=config.LOG_LEVEL,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )

    if config.LLM_PROVIDER == 'gemini':
        if not os.environ.get('GEMINI_API_KEY') and not os.environ.get('GOOGLE_API_KEY'):
            logger.warning("GEMINI_API_KEY or GOOGLE_API_KEY environment variable not set")
    elif not config.get_llm_api_key():
        logger.warning("LLM_API_KEY, GROQ_API_KEY or OPENAI_API_KEY environment variable not set")

    port = int(os.environ.get('PORT', 5000))
    app.run(debug=False, host='0.0.0.0', port=port)
