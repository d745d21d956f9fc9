from decimal import Decimal

import pytest

from catalog import Catalog, Product
from matchers import FuzzyMatcher, SubstringMatcher
from order_parser import Order, OrderLine, extract_quantity, format_currency, parse


class TestParse:
    def test_default_quantity(self, milk_catalog):
        order = parse("I want milk", milk_catalog)
        assert len(order.lines) == 1
        assert order.lines[0].product.name == "milk"
        assert order.lines[0].quantity == 1
        assert order.total == Decimal("2.50")

    def test_quantity_before_name(self, milk_catalog):
        order = parse("I want 3 milk please", milk_catalog)
        assert order.lines[0].quantity == 3
        assert order.total == Decimal("7.50")

    def test_quantity_after_name(self, milk_catalog):
        order = parse("get milk 2", milk_catalog)
        assert order.lines[0].quantity == 2
        assert order.total == Decimal("5.00")

    def test_multiple_products_in_catalog_order(self, grocery_catalog):
        order = parse("2 milk and 1 bread", grocery_catalog)
        assert [line.product.name for line in order.lines] == ["milk", "bread"]
        assert [line.quantity for line in order.lines] == [2, 1]
        assert order.total == Decimal("8.00")

    def test_catalog_order_wins_over_speech_order(self, grocery_catalog):
        order = parse("bread first, then 4 milk", grocery_catalog)
        assert [line.product.name for line in order.lines] == ["milk", "bread"]
        assert order.lines[0].quantity == 4

    def test_case_insensitive(self, milk_catalog):
        order = parse("I want MILK", milk_catalog)
        assert len(order.lines) == 1

    def test_no_match(self, grocery_catalog):
        order = parse("hello world", grocery_catalog)
        assert order.lines == ()
        assert order.total == 0

    @pytest.mark.parametrize("transcript", ["", "   ", None])
    def test_empty_transcript(self, grocery_catalog, transcript):
        order = parse(transcript, grocery_catalog)
        assert order.is_empty
        assert order.total == 0

    def test_empty_catalog(self):
        order = parse("2 milk and 1 bread", Catalog.empty())
        assert order.is_empty
        assert order.total == 0

    def test_idempotent(self, grocery_catalog):
        first = parse("2 milk and bread 5", grocery_catalog)
        second = parse("2 milk and bread 5", grocery_catalog)
        assert first == second
        assert first.total == second.total

    def test_repeated_mention_gives_one_line(self, milk_catalog):
        order = parse("milk, then 2 milk, more milk", milk_catalog)
        assert len(order.lines) == 1
        assert order.lines[0].quantity == 1

    def test_duplicate_catalog_names_give_one_line(self):
        catalog = Catalog([
            Product(1, "Milk", Decimal("2.50")),
            Product(2, "milk", Decimal("9.99")),
        ])
        order = parse("3 milk", catalog)
        assert len(order.lines) == 1
        assert order.lines[0].product.product_id == 1
        assert order.total == Decimal("7.50")

    def test_word_boundary_is_default(self, grocery_catalog):
        assert parse("where is the breadbox", grocery_catalog).is_empty

    def test_substring_matcher_matches_inside_words(self, grocery_catalog):
        order = parse("where is the breadbox", grocery_catalog, SubstringMatcher())
        assert [line.product.name for line in order.lines] == ["bread"]
        assert order.lines[0].quantity == 1

    def test_multi_word_product(self):
        catalog = Catalog([Product(5, "orange juice", Decimal("3.99"))])
        order = parse("get 2 orange juice", catalog)
        assert order.lines[0].quantity == 2
        assert order.total == Decimal("7.98")

    def test_noisy_transcript(self, grocery_catalog):
        order = parse("um, uh, I'd like... 2 milk, and, er, bread.", grocery_catalog)
        assert [line.quantity for line in order.lines] == [2, 1]

    def test_fuzzy_mention_reads_quantity(self):
        catalog = Catalog([Product(6, "bananas", Decimal("1.29"))])
        order = parse("3 bannanas please", catalog, FuzzyMatcher())
        assert [(line.product.name, line.quantity) for line in order.lines] == [("bananas", 3)]
        assert order.total == Decimal("3.87")

    def test_fuzzy_mention_quantity_after(self):
        catalog = Catalog([Product(5, "orange juice", Decimal("3.99"))])
        order = parse("get orange juise 2", catalog, FuzzyMatcher())
        assert order.lines[0].quantity == 2

    def test_total_never_negative(self, grocery_catalog):
        for transcript in ["0 milk", "-3 milk", "milk -1", "milk 0 bread"]:
            order = parse(transcript, grocery_catalog)
            assert order.total >= 0
            assert all(line.quantity >= 1 for line in order.lines)


class TestExtractQuantity:
    def test_before_wins_over_after(self):
        assert extract_quantity("2 milk 5", "milk") == 2

    def test_after(self):
        assert extract_quantity("milk 4 please", "milk") == 4

    def test_default(self):
        assert extract_quantity("some milk please", "milk") == 1

    def test_name_not_present(self):
        assert extract_quantity("bread only", "milk") == 1

    def test_first_occurrence_only(self):
        assert extract_quantity("milk and then 7 milk", "milk") == 1

    def test_zero_is_not_a_quantity(self):
        assert extract_quantity("0 milk", "milk") == 1

    def test_decimal_is_not_a_quantity(self):
        assert extract_quantity("1.5 milk", "milk") == 1

    def test_case_and_punctuation(self):
        assert extract_quantity("Milk, 3!", "MILK") == 3

    def test_multi_word_name_after(self):
        assert extract_quantity("whole milk 6", "whole milk") == 6

    def test_part_of_larger_word(self):
        assert extract_quantity("3 breadbox", "bread") == 1

    def test_with_fuzzy_matcher(self):
        assert extract_quantity("bannanas 4", "bananas", FuzzyMatcher()) == 4
        assert extract_quantity("bannanas 4", "bananas") == 1


class TestOrder:
    def test_line_total(self):
        line = OrderLine(Product(1, "eggs", Decimal("4.25")), 3)
        assert line.line_total == Decimal("12.75")

    def test_total_keeps_full_precision(self):
        order = Order((OrderLine(Product(1, "nuts", Decimal("0.333")), 3),))
        assert order.total == Decimal("0.999")
        assert format_currency(order.total) == "$1.00"

    def test_to_frame(self, grocery_catalog):
        df = parse("2 milk and 1 bread", grocery_catalog).to_frame()
        assert list(df.columns) == ["product", "quantity", "unit_price", "line_total"]
        assert df["product"].tolist() == ["milk", "bread"]
        assert df["line_total"].tolist() == [Decimal("5.0"), Decimal("3.0")]

    def test_empty_frame(self):
        df = Order().to_frame()
        assert df.empty
        assert "product" in df.columns


@pytest.mark.parametrize("value, expected", [
    (Decimal("8"), "$8.00"),
    (Decimal("1234.5"), "$1,234.50"),
    (Decimal("0.005"), "$0.01"),
    (2.5, "$2.50"),
    (None, "—"),
])
def test_format_currency(value, expected):
    assert format_currency(value) == expected
