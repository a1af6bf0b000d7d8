from config.settings import Settings
from repos.integration_repo import IntegrationRepository, SettingsAccountStore


class FakeSnap:
    def __init__(self, data):
        self.exists = data is not None
        self._data = data

    def to_dict(self):
        return self._data


class FakeDoc:
    def __init__(self, docs, doc_id):
        self.docs = docs
        self.doc_id = doc_id

    def get(self):
        return FakeSnap(self.docs.get(self.doc_id))


class FakeCollection:
    def __init__(self, docs):
        self.docs = docs

    def document(self, doc_id):
        return FakeDoc(self.docs, doc_id)


class FakeDb:
    def __init__(self, collections):
        self.collections = collections

    def collection(self, name):
        return FakeCollection(self.collections.get(name, {}))


def test_integration_repo_reads_twilio_doc():
    db = FakeDb(
        {
            "integrations": {
                "Twilio": {
                    "enabled": True,
                    "account_sid": "AC9",
                    "auth_token": "t",
                    "api_base_url": "https://stub.local",
                }
            }
        }
    )
    acct = IntegrationRepository(db=db).get_account("Twilio")
    assert acct.enabled is True
    assert acct.account_sid == "AC9"
    assert acct.api_base_url == "https://stub.local"


def test_integration_repo_missing_doc_is_none():
    assert IntegrationRepository(db=FakeDb({})).get_account("Twilio") is None


def test_integration_repo_defaults_to_disabled():
    db = FakeDb({"integrations": {"Twilio": {"account_sid": "AC9"}}})
    acct = IntegrationRepository(db=db).get_account("Twilio")
    assert acct.enabled is False
    assert acct.auth_token is None


def test_settings_account_store():
    s = Settings(TWILIO_ENABLED=True, TWILIO_ACCOUNT_SID="AC7", TWILIO_AUTH_TOKEN="")
    store = SettingsAccountStore(s)
    acct = store.get_account("Twilio")
    assert acct.enabled is True
    assert acct.account_sid == "AC7"
    assert acct.auth_token is None
    assert acct.api_base_url is None
    assert store.get_account("Vonage") is None
