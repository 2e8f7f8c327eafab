# tests/api/test_contact_api.py
from securetag import create_app
from securetag.services.email_service import CONTACT_CONFIRMATION, CONTACT_NOTIFICATION

MESSAGE = {
    'firstName': 'Chinedu',
    'lastName': 'Okafor',
    'email': 'Chinedu@Example.com',
    'company': 'Okafor & Sons',
    'message': 'I would like a demo of <b>SecureTag</b> for our pharmacy chain.'
}


def test_contact_is_stored_and_both_parties_notified(client, store, notifier):
    response = client.post('/api/contact', json=MESSAGE)

    assert response.status_code == 201
    assert response.get_json()['success'] is True

    (saved,) = store.contacts
    assert saved['email'] == 'chinedu@example.com'
    assert saved['company'] == 'Okafor &amp; Sons'
    assert '<b>' not in saved['message']
    assert saved['status'] == 'new'

    templates = {(template, recipient) for template, recipient, _ in notifier.sent}
    assert templates == {
        (CONTACT_NOTIFICATION, 'inbox@securetag.test'),
        (CONTACT_CONFIRMATION, 'chinedu@example.com')
    }


def test_contact_succeeds_when_email_fails(client, store, notifier):
    notifier.deliver = False

    response = client.post('/api/contact', json=MESSAGE)

    assert response.status_code == 201
    assert len(store.contacts) == 1


def test_contact_validation(client, store):
    response = client.post('/api/contact', json={
        'firstName': 'C',
        'lastName': 'Okafor',
        'email': 'not-an-email',
        'message': 'short'
    })

    assert response.status_code == 400
    details = response.get_json()['details']
    assert 'First name must be between 2 and 50 characters' in details
    assert 'Please provide a valid email address' in details
    assert 'Message must be between 10 and 1000 characters' in details
    assert store.contacts == []


def test_contact_rate_limited(settings, store, notifier):
    settings.ratelimit_enabled = True
    settings.contact_rate_limit = '2 per minute'
    client = create_app(settings, store=store, notifier=notifier).test_client()

    statuses = [client.post('/api/contact', json=MESSAGE).status_code for _ in range(3)]

    assert statuses == [201, 201, 429]
    assert len(store.contacts) == 2
