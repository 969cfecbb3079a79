from transfer_news.utils import redact_secrets, redact_url

def test_redact_url_hides_access_key():
    u = redact_url('https://api.mediastack.com/v1/news?access_key=abc123&keywords=soccer')
    assert 'abc123' not in u
    assert u.endswith('access_key=[REDACTED]&keywords=soccer')

def test_redact_secrets_processor():
    ev = redact_secrets(None, 'info', {
        'event': 'fetching news',
        'access_key': 'abc123',
        'url': 'https://x/news?access_key=abc123',
        'params': {'access_key': 'abc123', 'limit': 100},
    })
    assert 'abc123' not in str(ev)
    assert ev['params']['limit'] == 100
