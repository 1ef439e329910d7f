"""Test Discord webhook notifications"""

from unittest.mock import Mock, patch

import requests

from discord_notifier import send_sync_notification


class TestSendSyncNotification:

    @patch('discord_notifier.requests.post')
    def test_no_webhook_no_request(self, mock_post, monkeypatch):
        monkeypatch.delenv('DISCORD_WEBHOOK_URL', raising=False)

        assert send_sync_notification('subA', ['t1']) is False
        mock_post.assert_not_called()

    @patch('discord_notifier.requests.post')
    def test_posts_embed(self, mock_post, monkeypatch):
        monkeypatch.setenv('DISCORD_WEBHOOK_URL', 'https://discord.test/hook')
        mock_post.return_value = Mock(status_code=204)

        assert send_sync_notification('subA', ['t1', 't2']) is True

        mock_post.assert_called_once()
        args, kwargs = mock_post.call_args
        assert args[0] == 'https://discord.test/hook'
        embed = kwargs['json']['embeds'][0]
        assert embed['title'].startswith('🎵 2 New Tracks')
        assert [f['value'] for f in embed['fields']] == [
            'https://open.spotify.com/track/t1',
            'https://open.spotify.com/track/t2',
        ]

    @patch('discord_notifier.requests.post')
    def test_long_list_truncated(self, mock_post, monkeypatch):
        monkeypatch.setenv('DISCORD_WEBHOOK_URL', 'https://discord.test/hook')
        mock_post.return_value = Mock(status_code=200)

        send_sync_notification('subA', [f't{i}' for i in range(30)])

        fields = mock_post.call_args[1]['json']['embeds'][0]['fields']
        assert len(fields) == 26
        assert '5 more tracks' in fields[-1]['value']

    @patch('discord_notifier.requests.post')
    def test_request_error_not_raised(self, mock_post, monkeypatch):
        monkeypatch.setenv('DISCORD_WEBHOOK_URL', 'https://discord.test/hook')
        mock_post.side_effect = requests.exceptions.Timeout('slow')

        assert send_sync_notification('subA', ['t1']) is False

    @patch('discord_notifier.requests.post')
    def test_bad_status(self, mock_post, monkeypatch):
        monkeypatch.setenv('DISCORD_WEBHOOK_URL', 'https://discord.test/hook')
        mock_post.return_value = Mock(status_code=400, text='bad request')

        assert send_sync_notification('subA', ['t1']) is False
