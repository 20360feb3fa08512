"""Tests for ID and join code generation."""

from huddle.utils.id_generator import BASE36_ALPHABET, generate_id, generate_join_code


class TestGenerateId:
    def test_prefix(self):
        assert generate_id("ws").startswith("ws_")

    def test_no_prefix(self):
        assert "_" not in generate_id()

    def test_unique(self):
        ids = {generate_id("msg") for _ in range(1000)}
        assert len(ids) == 1000


class TestGenerateJoinCode:
    def test_default_length(self):
        assert len(generate_join_code()) == 6

    def test_custom_length(self):
        assert len(generate_join_code(10)) == 10

    def test_alphabet(self):
        for _ in range(200):
            code = generate_join_code()
            assert set(code) <= set(BASE36_ALPHABET)
            assert code == code.lower()

    def test_uses_whole_alphabet(self):
        seen = set("".join(generate_join_code() for _ in range(500)))
        assert seen == set(BASE36_ALPHABET)
