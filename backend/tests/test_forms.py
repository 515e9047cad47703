"""
Tests for form validation, embed building and webhook delivery.
"""

import pytest
import requests

from errors import NotificationDeliveryError, ValidationError
from forms import EMBED_FIELD_LIMIT, EMBED_TOTAL_LIMIT, ContactMessage, DemoSubmission
from notification_service import DiscordNotifier

from conftest import make_response


@pytest.fixture
def submission_data():
    return {
        'name': 'Jane Doe',
        'email': 'jane@example.com',
        'artistName': 'Night Shift',
        'projectTitle': 'Low Orbit',
        'links': 'https://soundcloud.com/nightshift/private',
        'message': 'Dark techno, 3 tracks.',
        'confirmRights': True,
    }


class TestDemoSubmission:
    """Tests for DemoSubmission validation."""

    def test_valid_submission(self, submission_data):
        submission = DemoSubmission.from_json(submission_data)

        assert submission.artist_name == 'Night Shift'
        assert submission.confirm_rights is True

    @pytest.mark.parametrize('field', ['name', 'email', 'artistName', 'links', 'confirmRights'])
    def test_required_fields(self, submission_data, field):
        submission_data[field] = False if field == 'confirmRights' else ''

        with pytest.raises(ValidationError) as exc_info:
            DemoSubmission.from_json(submission_data)

        assert exc_info.value.field == field
        assert exc_info.value.status_code == 400

    def test_optional_fields_may_be_missing(self, submission_data):
        del submission_data['projectTitle']
        del submission_data['message']

        submission = DemoSubmission.from_json(submission_data)

        assert submission.project_title is None
        assert submission.message is None

    def test_whitespace_only_counts_as_submitted(self, submission_data):
        submission_data['projectTitle'] = '   '
        submission_data['name'] = '   '

        submission = DemoSubmission.from_json(submission_data)
        embed = submission.to_embed()

        values = {f['name']: f['value'] for f in embed['fields']}
        assert submission.name is None
        assert values['Name'] == 'n/a'
        assert values['Project Title'] == 'n/a'

    def test_no_body(self):
        with pytest.raises(ValidationError, match='No data provided'):
            DemoSubmission.from_json(None)

    def test_embed_contains_submitted_fields(self, submission_data):
        embed = DemoSubmission.from_json(submission_data).to_embed()

        values = {f['name']: f['value'] for f in embed['fields']}
        assert embed['title'] == 'New demo submission'
        assert values['Name'] == 'Jane Doe'
        assert values['Email'] == 'jane@example.com'
        assert values['Artist Name'] == 'Night Shift'
        assert values['Project Title'] == 'Low Orbit'
        assert values['Links'] == 'https://soundcloud.com/nightshift/private'
        assert values['Rights Confirmed'] == 'Yes'
        assert 'timestamp' in embed

    def test_long_values_are_truncated(self, submission_data):
        submission_data['message'] = 'x' * 5000

        embed = DemoSubmission.from_json(submission_data).to_embed()

        message = next(f for f in embed['fields'] if f['name'] == 'Message')
        assert len(message['value']) == EMBED_FIELD_LIMIT

    def test_embed_fits_total_limit(self, submission_data):
        for field in ('name', 'email', 'artistName', 'projectTitle', 'links', 'message'):
            submission_data[field] = field[0] * 5000

        embed = DemoSubmission.from_json(submission_data).to_embed()

        total = len(embed['title']) + sum(len(f['name']) + len(f['value']) for f in embed['fields'])
        assert total <= EMBED_TOTAL_LIMIT
        assert all(len(f['value']) <= EMBED_FIELD_LIMIT for f in embed['fields'])
        assert all(f['value'].strip() for f in embed['fields'])

    def test_short_embed_is_untouched(self, submission_data):
        embed = DemoSubmission.from_json(submission_data).to_embed()

        message = next(f for f in embed['fields'] if f['name'] == 'Message')
        assert message['value'] == 'Dark techno, 3 tracks.'


class TestContactMessage:

    def test_valid_message(self):
        message = ContactMessage.from_json({'name': 'A', 'email': 'a@b.c', 'message': 'Hi'})

        embed = message.to_embed()

        values = {f['name']: f['value'] for f in embed['fields']}
        assert values['Topic'] == 'n/a'
        assert values['Message'] == 'Hi'

    @pytest.mark.parametrize('field', ['name', 'email', 'message'])
    def test_required_fields(self, field):
        data = {'name': 'A', 'email': 'a@b.c', 'message': 'Hi', 'topic': 'Sync'}
        data.pop(field)

        with pytest.raises(ValidationError, match=f'{field} is required'):
            ContactMessage.from_json(data)


class TestDiscordNotifier:
    """Tests for webhook delivery."""

    def test_posts_embed(self, mock_session):
        mock_session.post.return_value = make_response(204)
        notifier = DiscordNotifier('https://discord.test/hook', session=mock_session)

        result = notifier.send_embed({'title': 'Hello'})

        assert result.ok
        mock_session.post.assert_called_once_with(
            'https://discord.test/hook',
            json={'username': 'Obsidian Labs', 'embeds': [{'title': 'Hello'}]}
        )

    def test_error_status(self, mock_session):
        mock_session.post.return_value = make_response(400, text='bad embed')
        notifier = DiscordNotifier('https://discord.test/hook', session=mock_session)

        result = notifier.send_embed({'title': 'Hello'})

        assert isinstance(result.error, NotificationDeliveryError)
        assert result.error.status_code == 500

    def test_network_error(self, mock_session):
        mock_session.post.side_effect = requests.exceptions.Timeout('slow')
        notifier = DiscordNotifier('https://discord.test/hook', session=mock_session)

        assert isinstance(notifier.send_embed({}).error, NotificationDeliveryError)

    def test_missing_webhook_url(self, mock_session):
        notifier = DiscordNotifier(None, session=mock_session)

        result = notifier.send_embed({'title': 'Hello'})

        assert isinstance(result.error, NotificationDeliveryError)
        mock_session.post.assert_not_called()
