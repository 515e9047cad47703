# routes/forms.py
from flask import Blueprint, current_app, jsonify, request
import logging

from forms import ContactMessage, DemoSubmission

logger = logging.getLogger(__name__)
forms_bp = Blueprint('forms', __name__)


def _forward(embed: dict):
    notifier = current_app.extensions['notifier']
    notifier.send_embed(embed).unwrap()
    return jsonify({'status': 'ok'})


@forms_bp.route('/submit', methods=['POST'])
def submit_demo():
    """
    Forward a demo submission to the label's Discord channel

    Required: name, email, artistName, links, confirmRights
    Optional: projectTitle, message
    """
    submission = DemoSubmission.from_json(request.get_json(silent=True))
    logger.info(f"Demo submission from {submission.artist_name}")
    return _forward(submission.to_embed())


@forms_bp.route('/contact', methods=['POST'])
def contact():
    """
    Forward a contact message to the label's Discord channel

    Required: name, email, message
    Optional: topic
    """
    message = ContactMessage.from_json(request.get_json(silent=True))
    logger.info(f"Contact message from {message.email} (topic={message.topic})")
    return _forward(message.to_embed())
