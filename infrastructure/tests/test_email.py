from unittest.mock import patch

from django.core import mail
from django.test import TestCase, override_settings

from infrastructure.email import (
    EmailException,
    EmailFactory,
    EmailMessage,
    EmailServiceInterface,
    MockEmailService,
    SMTPEmailService,
)


def contact_request(**overrides):
    fields = {
        "subject": "Product information request: Oak Desk",
        "body": "Jane Doe would like more information about Oak Desk (product-1).",
        "to": ["supplier@example.com"],
        "reply_to": ["jane@buyer.example"],
    }
    fields.update(overrides)
    return EmailMessage(**fields)


class EmailMessageTest(TestCase):
    def test_recipient_required(self):
        with self.assertRaises(ValueError):
            contact_request(to=[])

    def test_interface_is_abstract(self):
        with self.assertRaises(TypeError):
            EmailServiceInterface()


class MockEmailServiceTest(TestCase):
    def test_send_records_message(self):
        service = MockEmailService()
        message = contact_request()

        self.assertTrue(service.send(message))
        self.assertEqual(service.sent_messages, [message])

    def test_recipient_is_masked_in_logs(self):
        with self.assertLogs("infrastructure.email.mock_service", level="INFO") as logs:
            MockEmailService().send(contact_request())

        self.assertNotIn("supplier@example.com", logs.output[0])
        self.assertIn("su***@example.com", logs.output[0])


@override_settings(
    EMAIL_BACKEND="django.core.mail.backends.locmem.EmailBackend",
    DEFAULT_FROM_EMAIL="storefront@example.com",
)
class SMTPEmailServiceTest(TestCase):
    def test_send_uses_django_mail(self):
        self.assertTrue(SMTPEmailService().send(contact_request()))

        self.assertEqual(len(mail.outbox), 1)
        sent = mail.outbox[0]
        self.assertEqual(sent.from_email, "storefront@example.com")
        self.assertEqual(sent.to, ["supplier@example.com"])
        self.assertEqual(sent.reply_to, ["jane@buyer.example"])

    def test_explicit_sender_wins(self):
        SMTPEmailService(default_from="catalog@example.com").send(contact_request())

        self.assertEqual(mail.outbox[0].from_email, "catalog@example.com")

    @patch("django.core.mail.EmailMessage.send")
    def test_transport_failure_raises(self, mock_send):
        mock_send.side_effect = OSError("connection refused")

        with self.assertRaises(EmailException):
            SMTPEmailService().send(contact_request())


class EmailFactoryTest(TestCase):
    @override_settings(INFRASTRUCTURE={"EMAIL_BACKEND_TYPE": "mock"})
    def test_backend_from_settings(self):
        self.assertIsInstance(EmailFactory.create(), MockEmailService)

    def test_explicit_backend(self):
        self.assertIsInstance(EmailFactory.create("smtp"), SMTPEmailService)

    def test_invalid_backend(self):
        with self.assertRaises(ValueError):
            EmailFactory.create("pigeon")
