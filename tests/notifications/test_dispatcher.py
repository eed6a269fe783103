import threading

from rfid_attendance.notifications.dispatcher import AlertDispatcher
from rfid_attendance.notifications.sink import SmtpAlertSink, SmtpConfig, TenantMismatchAlert

from tests.fakes import ExplodingSink, RecordingSink


def _alert(email="office@alpha.test"):
    return TenantMismatchAlert(
        owner_api_key="alpha-key",
        owner_name="Alpha Academy",
        owner_email=email,
        person_name="Ama Mensah",
        uid="A1B2C3D4",
        device_uid="beta-gate",
        scanning_api_key="beta-key",
    )


def test_inline_delivery():
    sink = RecordingSink()
    AlertDispatcher(sink, run_async=False).dispatch_tenant_mismatch(_alert())

    assert sink.alerts == [_alert()]


def test_sink_errors_are_logged_not_raised(caplog):
    AlertDispatcher(ExplodingSink(), run_async=False).dispatch_tenant_mismatch(_alert())

    assert "Failed to deliver mismatch alert" in caplog.text


def test_async_delivery_runs_off_the_calling_thread():
    delivered = threading.Event()
    threads = []

    class Sink:
        def send_tenant_mismatch(self, alert):
            threads.append(threading.current_thread())
            delivered.set()

    AlertDispatcher(Sink()).dispatch_tenant_mismatch(_alert())

    assert delivered.wait(timeout=5)
    assert threads[0] is not threading.current_thread()


def test_smtp_sink_skips_tenants_without_email(monkeypatch):
    def no_network(*args, **kwargs):
        raise AssertionError("SMTP must not be contacted")

    monkeypatch.setattr("smtplib.SMTP", no_network)
    sink = SmtpAlertSink(SmtpConfig(host="mail.test"), subject="s", render_body=lambda a: "b")

    sink.send_tenant_mismatch(_alert(email=None))


def test_smtp_sink_sends_to_owner(monkeypatch):
    sent = []

    class FakeSMTP:
        def __init__(self, host, port, timeout):
            self.host = host

        def __enter__(self):
            return self

        def __exit__(self, *exc):
            return False

        def starttls(self):
            pass

        def login(self, user, password):
            pass

        def send_message(self, msg):
            sent.append(msg)

    monkeypatch.setattr("smtplib.SMTP", FakeSMTP)
    sink = SmtpAlertSink(SmtpConfig(host="mail.test"), subject="Tag scanned", render_body=lambda a: a.person_name)

    sink.send_tenant_mismatch(_alert())

    assert sent[0]["To"] == "office@alpha.test"
    assert sent[0]["Subject"] == "Tag scanned"
    assert "Ama Mensah" in sent[0].get_content()
