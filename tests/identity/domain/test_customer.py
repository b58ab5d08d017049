"""Tests for the Customer record and MailingAddress value object."""

import pytest
from comicshop.identity.customer import Customer, MailingAddress
from pydantic import ValidationError


class TestMailingAddress:
    def test_as_lines(self):
        address = MailingAddress(street="123 Main St", city="Springfield", state="IL", postal_code="62701")
        assert address.as_lines() == ["123 Main St", "Springfield, IL 62701"]

    def test_empty_address_has_no_lines(self):
        assert MailingAddress().as_lines() == []

    def test_is_immutable(self):
        address = MailingAddress(street="123 Main St")
        with pytest.raises(ValidationError):
            address.street = "9 Elm St"


class TestCustomer:
    def test_ids_assigned_in_sequence(self):
        assert Customer().customer_id == 1
        assert Customer().customer_id == 2

    def test_full_name(self):
        customer = Customer(first_name="Ada", last_name="Lovelace")
        assert customer.full_name == "Ada Lovelace"

    def test_full_name_skips_blank_parts(self):
        assert Customer(first_name="Prince").full_name == "Prince"

    def test_form_values_are_stored_unverified(self):
        customer = Customer(email="not-an-email", phone="call me")
        assert customer.email == "not-an-email"
        assert customer.phone == "call me"

    def test_address_defaults_to_blank(self):
        assert Customer().address == MailingAddress()
