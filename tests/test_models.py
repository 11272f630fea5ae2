import pytest

from pydantic import ValidationError

from flashdeck.models import CardField, CardSide, Flashcard


class TestFlashcardModel:
    def test_flashcard_defaults(self):
        """A card with no arguments has no fields, no sides and manual rendering."""
        card = Flashcard()
        assert card.fields == []
        assert card.sides == []
        assert card.auto_rendering is False

    def test_flashcard_accepts_plain_dicts(self):
        card = Flashcard.model_validate(
            {
                "fields": [{"data": "Q"}, {"data": "A"}],
                "sides": [{"data": "front"}],
                "auto_rendering": True,
            }
        )
        assert card.fields == [CardField(data="Q"), CardField(data="A")]
        assert card.sides == [CardSide(data="front")]
        assert card.auto_rendering is True

    def test_flashcard_rejects_unknown_keys(self):
        with pytest.raises(ValidationError, match="Extra inputs are not permitted"):
            Flashcard(fields=[], sides=[], colour="red")

    @pytest.mark.parametrize("model", [CardField, CardSide])
    def test_data_is_required(self, model):
        with pytest.raises(ValidationError) as excinfo:
            model()
        assert "Field required" in str(excinfo.value)

    def test_field_data_must_be_text(self):
        with pytest.raises(ValidationError, match="Input should be a valid string"):
            CardField(data=42)

    def test_card_equality_is_by_value(self):
        a = Flashcard(fields=[CardField(data="x")], sides=[CardSide(data="y")])
        b = Flashcard(fields=[CardField(data="x")], sides=[CardSide(data="y")])
        assert a == b
