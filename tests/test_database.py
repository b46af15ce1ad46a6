import pytest

from blocktext.blocks import Disambiguator, build_database, default_database
from blocktext.errors import DatabaseError


def test_descriptors_from_flags():
    db = default_database()
    move = db.get("move _ steps")
    assert move.category == "motion" and move.shape is None and move.flag is None

    forever = db.get("forever")
    assert forever.shape == "cap" and forever.flag == "cstart"

    flag = db.get("when @green-flag clicked")
    assert flag.shape == "hat"
    assert flag.image_token == "green-flag"
    assert db.get("turn @arrow-ccw _ degrees").image_token == "arrow-ccw"


def test_repeated_rows_keep_position_and_last_category_wins():
    db = default_database()
    assert db.blockids.count("set pen color to _") == 2
    assert db.blockids.count("_ of _") == 2
    assert db.get("_ of _").category == "operators"
    assert db.get("length of _").category == "operators"
    assert len(db.unique_blockids()) == len(db)


def test_disambiguators_assigned():
    db = default_database()
    assert db.get("_ of _").disambiguator is Disambiguator.OF_FUNCTION
    assert db.get("length of _").disambiguator is Disambiguator.LENGTH_OF
    assert db.get("stop _").disambiguator is Disambiguator.STOP_BLOCK
    assert db.get("say _").disambiguator is Disambiguator.NONE


def test_default_database_is_shared():
    assert default_database() is default_database()
    assert "move _ steps" in default_database()


def test_two_structural_flags_rejected():
    with pytest.raises(DatabaseError) as ei:
        build_database({"control": [("weird _", "cstart", "cend")]})
    assert ei.value.blockid == "weird _"


def test_unknown_flag_or_category_rejected():
    with pytest.raises(DatabaseError):
        build_database({"control": [("weird", "sideways")]})
    with pytest.raises(DatabaseError):
        build_database({"banana": ["peel"]})


def test_shape_and_flag_may_coexist():
    db = build_database({"control": [("loop", "cstart", "cap")]})
    assert db.get("loop").shape == "cap"
    assert db.get("loop").flag == "cstart"
