"""
Unit tests for ProductDocument

Tests:
- Population: details, currency, buyer and recipient options
- Validation: required fields and error accumulation
- Metadata: fingerprint stamped once at creation
"""

from datetime import date, datetime
from decimal import Decimal

import pytest

from giveit.errors import ErrorKind
from giveit.exporter.json_exporter import JsonExporter
from giveit.product.document import ProductDocument, flatten_mapping
from giveit.schema.models import Option
from giveit.version import SDK_VERSION_TAG


# ============================================================================
# FIXTURES
# ============================================================================


@pytest.fixture
def valid_details():
    """Details with every required field"""
    return {
        "code": "SKU-001",
        "price": 1999,
        "name": "Enamel Mug",
        "image": "https://example.com/mug.png",
    }


@pytest.fixture
def fixed_clock():
    """Clock frozen at a known moment"""
    return lambda: datetime(2026, 3, 14, 9, 26, 53)


@pytest.fixture
def product_data(valid_details):
    """Plain product data as loaded from JSON"""
    return {
        "details": valid_details,
        "currency": "EUR",
        "options": {
            "buyer": [{"id": "gift_wrap", "price": 350, "name": "Gift wrap"}],
            "recipient": {
                "colour": {
                    "id": "colour",
                    "choices": [{"id": "blue", "price": 0}, {"id": "gold", "price": 200}],
                },
            },
        },
    }


# ============================================================================
# TEST: Population
# ============================================================================


class TestPopulation:
    """Tests for building a document step by step"""

    def test_set_details_merges_last_write_wins(self):
        """Test details are merged per key"""
        product = ProductDocument({"code": "A", "name": "Old"})

        result = product.set_details({"name": "New", "image": "x.png"})

        assert result is product
        assert product.details == {"code": "A", "name": "New", "image": "x.png"}

    def test_set_currency_valid(self):
        """Test a 3-letter code is stored verbatim"""
        product = ProductDocument().set_currency("USD")

        assert product.currency == "USD"
        assert product.errors == []

    @pytest.mark.parametrize("code", ["US", "DOLLAR", ""])
    def test_set_currency_invalid(self, code):
        """Test other lengths record one error and leave currency unset"""
        product = ProductDocument()

        product.set_currency(code)

        assert product.currency is None
        assert [e.kind for e in product.errors] == [ErrorKind.INVALID_CURRENCY_CODE]
        assert "must be a 3-letter ISO code" in product.errors[0].message

    def test_invalid_currency_keeps_previous_value(self):
        """Test a failed call does not overwrite an earlier currency"""
        product = ProductDocument().set_currency("GBP")

        product.set_currency("POUND")

        assert product.currency == "GBP"

    def test_currency_defaults_to_unset(self):
        """Test currency is absent unless set"""
        product = ProductDocument()

        assert product.currency is None
        assert "currency" not in product.content()

    def test_duplicate_buyer_option_recorded(self):
        """Test the second option with the same id fails and only the first is kept"""
        product = ProductDocument()

        assert product.add_buyer_option(Option(id="size", price=100)) is True
        assert product.add_buyer_option(Option(id="size", price=200)) is False

        assert product.options.get("buyer", "size").price == 100
        assert [e.kind for e in product.errors] == [ErrorKind.DUPLICATE_OPTION_ID]
        assert product.errors[0].message == "cannot add option with duplicate id size"

    def test_option_sequence_partial_success(self):
        """Test each option of a sequence is added on its own"""
        product = ProductDocument()

        ok = product.add_buyer_option([Option(id="a"), Option(id="a"), Option(id="b")])

        assert ok is False
        assert [o.id for o in product.options.options("buyer")] == ["a", "b"]
        assert len(product.errors) == 1

    def test_recipient_option_prices_stripped(self):
        """Test a priced nested choice loses its price and records a warning"""
        colour = Option(
            id="colour",
            choices=[Option(id="blue", price=0), Option(id="gold", price=200)],
        )
        product = ProductDocument()

        product.add_buyer_option(colour)
        product.add_recipient_option(colour)

        recipient = product.options.get("recipient", "colour")
        buyer = product.options.get("buyer", "colour")
        assert [c.price for c in recipient.choices] == [0, None]
        assert [c.price for c in buyer.choices] == [0, 200]
        assert [(w.option_id, w.price) for w in product.warnings] == [("gold", 200)]
        assert product.errors == []

    def test_options_accept_plain_dicts(self):
        """Test options given as mappings are converted"""
        product = ProductDocument()

        product.add_recipient_option({"id": "card", "price": 99, "name": "Card"})

        assert product.options.get("recipient", "card") == Option(id="card", attributes={"name": "Card"})

    def test_from_dict(self, product_data):
        """Test building a whole document from plain data"""
        product = ProductDocument.from_dict(product_data)

        assert product.currency == "EUR"
        assert product.options.get("buyer", "gift_wrap").price == 350
        assert product.options.get("recipient", "colour").choices[1].price is None
        assert len(product.warnings) == 1


# ============================================================================
# TEST: Validation
# ============================================================================


class TestValidation:
    """Tests for flatten and validate"""

    def test_flatten_mapping_nested(self):
        """Test nested mappings become colon-joined keys"""
        flat = flatten_mapping({"details": {"code": "A1", "size": {"w": 2, "h": 3}}})

        assert flat == {"details:code": "A1", "details:size:w": 2, "details:size:h": 3}

    def test_flatten_excludes_options(self, valid_details):
        """Test options are not part of the flat view"""
        product = ProductDocument(valid_details, currency="USD")
        product.add_buyer_option(Option(id="size"))

        flat = product.flatten()

        assert flat["details:code"] == "SKU-001"
        assert flat["currency"] == "USD"
        assert not any(key.startswith("options") for key in flat)

    def test_valid_product(self, valid_details):
        """Test a complete product validates"""
        product = ProductDocument(valid_details)

        assert product.validate() is True
        assert product.errors == []

    def test_empty_product_reports_every_missing_field(self):
        """Test one missing-field error per required field, in order"""
        product = ProductDocument()

        assert product.validate() is False
        assert product.error_messages() == [
            "missing field details:code",
            "missing field details:price",
            "missing field details:name",
            "missing field details:image",
        ]

    def test_name_over_limit(self, valid_details):
        """Test a 201-character name fails citing the limit"""
        valid_details["name"] = "n" * 201
        product = ProductDocument(valid_details)

        assert product.validate() is False
        assert product.error_messages() == ["details:name - must be no more than 200 characters"]

    def test_decimal_price_reported_not_raised(self, valid_details):
        """Test a Decimal price is a type error, not a crash"""
        valid_details["price"] = Decimal("19.99")
        product = ProductDocument(valid_details)

        assert product.validate() is False
        assert product.error_messages() == ["details:price - must be an integer"]

    def test_non_json_extra_detail_allowed(self, valid_details):
        """Test an extra detail of any type keeps a valid product valid"""
        valid_details["released"] = date(2020, 1, 1)
        product = ProductDocument(valid_details)

        assert product.validate() is True
        assert len(product.metadata.fingerprint) == 64

    def test_earlier_errors_do_not_fail_validation(self, valid_details):
        """Test validate only judges the errors it finds itself"""
        product = ProductDocument(valid_details)
        product.set_currency("EURO")

        assert product.validate() is True
        assert product.has_errors


# ============================================================================
# TEST: Metadata
# ============================================================================


class TestMetadata:
    """Tests for the stamped metadata"""

    def test_metadata_stamped_at_creation(self, valid_details, fixed_clock):
        """Test metadata fields are filled on construction"""
        product = ProductDocument(valid_details, clock=fixed_clock)

        assert len(product.metadata.fingerprint) == 64
        assert product.metadata.rendered_at.startswith("2026-03-14 09:26:53 ")
        assert product.metadata.sdk_version == SDK_VERSION_TAG

    def test_identical_input_identical_fingerprint(self, product_data):
        """Test fingerprints are deterministic and ignore the timestamp"""
        first = ProductDocument.from_dict(product_data, clock=lambda: datetime(2020, 1, 1))
        second = ProductDocument.from_dict(product_data, clock=lambda: datetime(2030, 1, 1))

        assert first.metadata.fingerprint == second.metadata.fingerprint

    def test_changed_detail_changes_fingerprint(self, valid_details):
        """Test any detail change yields a different fingerprint"""
        first = ProductDocument(dict(valid_details))
        second = ProductDocument(dict(valid_details, price=2000))

        assert first.metadata.fingerprint != second.metadata.fingerprint

    def test_detail_key_order_does_not_matter(self, valid_details):
        """Test the fingerprint uses a canonical form"""
        reordered = dict(reversed(list(valid_details.items())))

        assert (ProductDocument(valid_details).metadata.fingerprint
                == ProductDocument(reordered).metadata.fingerprint)

    def test_later_changes_not_reflected(self, valid_details):
        """Test the fingerprint reflects the data at creation only"""
        product = ProductDocument(valid_details)
        stamped = product.metadata

        product.set_details({"price": 1})
        product.add_buyer_option(Option(id="size"))

        assert product.stamp_metadata() is stamped
        assert product.metadata.fingerprint == ProductDocument(valid_details).metadata.fingerprint

    def test_non_json_values_fingerprint_deterministically(self, valid_details):
        """Test Decimal and date details fingerprint the same every time"""
        valid_details.update({"price": Decimal("19.99"), "released": date(2020, 1, 1)})

        first = ProductDocument(dict(valid_details))
        second = ProductDocument(dict(valid_details))
        changed = ProductDocument(dict(valid_details, released=date(2021, 1, 1)))

        assert first.metadata.fingerprint == second.metadata.fingerprint
        assert first.metadata.fingerprint != changed.metadata.fingerprint
        assert '"released":"2020-01-01"' in JsonExporter().export(first)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
