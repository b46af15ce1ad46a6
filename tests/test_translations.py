from blocktext import parse
from blocktext.nodes import CWrap, Icon, Label


def test_german_stack_block():
    (script,) = parse("gehe (10) er-Schritt", languages=["de"])
    (block,) = script.blocks
    assert (block.blockid, block.language, block.category) == ("move _ steps", "de", "motion")
    assert [p.value for p in block.pieces if isinstance(p, Label)] == ["gehe ", " er-Schritt"]


def test_german_control_flow():
    code = "Wenn die grüne Flagge angeklickt\nwiederhole (10) mal\ngehe (10) er-Schritt\nEnde"
    (script,) = parse(code, languages=["de"])
    hat, wrap = script.blocks
    assert hat.blockid == "when @green-flag clicked"
    assert Icon("green-flag") in hat.pieces
    assert isinstance(wrap, CWrap)
    assert wrap.header.blockid == "repeat _"
    assert wrap.contents[-1].flag == "cend"


def test_german_define_and_call():
    scripts = parse("Definiere springe\nspringe", languages=["de"])
    assert scripts[0].blocks[0].keyword == "Definiere"
    assert scripts[0].blocks[1].category == "custom"


def test_german_math_and_stop():
    (s1, s2) = parse("([Wurzel v] von (9))\n\nstoppe [andere Skripte der Figur v]", languages=["de"])
    assert s1.blocks[0].category == "operators"
    assert s2.blocks[0].shape == "stack"


def test_german_hat_with_literal_lt():
    (script,) = parse("Wenn Entfernung < (20)", languages=["de"])
    block = script.blocks[0]
    assert (block.blockid, block.shape) == ("when distance < _", "hat")


def test_english_still_available_with_translation():
    (script,) = parse("move (10) steps\ngehe (10) er-Schritt", languages=["de"])
    assert [b.language for b in script.blocks] == ["en", "de"]


def test_translation_not_leaked_between_calls():
    parse("gehe (10) er-Schritt", languages=["de"])
    (script,) = parse("gehe (10) er-Schritt")
    assert script.blocks[0].category == "obsolete"
