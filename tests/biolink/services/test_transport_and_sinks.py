"""Tests for biolink.services.shortlinks.RedirectTransport and biolink.services.sinks."""
import pytest
import requests
from unittest.mock import MagicMock

from biolink.services.shortlinks import RedirectTransport
from biolink.services.sinks import CallbackSink, CollectingSink


def _session(final_url='https://www.tiktok.com/@alice', status_error=None, history=1):
    session = MagicMock()
    session.headers = {}
    resp = MagicMock()
    resp.url = final_url
    resp.history = [MagicMock()] * history
    if status_error:
        resp.raise_for_status.side_effect = status_error
    session.get.return_value = resp
    return session, resp


class TestRedirectTransport:

    def test_returns_final_url(self):
        session, resp = _session()
        transport = RedirectTransport(timeout=3, session=session)
        assert transport('https://vm.tiktok.com/ZMabc/') == 'https://www.tiktok.com/@alice'
        session.get.assert_called_once_with(
            'https://vm.tiktok.com/ZMabc/', timeout=3, allow_redirects=True, stream=True,
        )
        resp.close.assert_called_once()

    def test_sets_browser_user_agent(self):
        session, _ = _session()
        RedirectTransport(session=session)
        assert 'Mozilla' in session.headers['User-Agent']

    def test_http_error_raises(self):
        session, resp = _session(status_error=requests.HTTPError('404'))
        with pytest.raises(requests.HTTPError):
            RedirectTransport(session=session)('https://vm.tiktok.com/gone/')
        resp.close.assert_called_once()


class TestSinks:

    def test_collecting_sink_keeps_order(self):
        sink = CollectingSink()
        first, second = MagicMock(url='a'), MagicMock(url='b')
        sink.emit(first)
        sink.emit(second)
        assert sink.records == [first, second]

    def test_callback_sink(self):
        callback = MagicMock()
        record = MagicMock()
        CallbackSink(callback).emit(record)
        callback.assert_called_once_with(record)
