"""
Tests unitaires des value objects Email et Siret.
"""

import pytest

from app.domain.errors import ValidationError
from app.domain.value_objects import Email, Siret


class TestEmail:

    def test_email_normalized(self):
        email = Email("  Contact@Example.COM ")
        assert email.value == "contact@example.com"
        assert email.domain == "example.com"

    @pytest.mark.parametrize("value", ["", "abc", "a@", "@example.com"])
    def test_email_invalid(self, value):
        with pytest.raises(ValidationError):
            Email(value)


class TestSiret:

    def test_siret(self):
        siret = Siret("732 829 320 00074")
        assert str(siret) == "73282932000074"
        assert siret.siren == "732829320"

    @pytest.mark.parametrize("value", [
        "",
        "1234567890123",
        "1234567890123A",
        "123456789000123",
        "12345678901234\n",
        "١٢٣٤٥٦٧٨٩٠١٢٣٤",
    ])
    def test_siret_invalid(self, value):
        """Format strict : 14 chiffres ASCII, sans retour à la ligne."""
        with pytest.raises(ValidationError):
            Siret(value)
