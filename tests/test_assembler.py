from blocktext import parse
from blocktext.nodes import Block, CMouth, CWrap, Comment


def test_hat_then_stack_block():
    scripts = parse("when green flag clicked\nmove (10) steps")
    assert len(scripts) == 1
    hat, move = scripts[0].blocks
    assert (hat.shape, hat.category) == ("hat", "events")
    assert (move.shape, move.category) == ("stack", "motion")


def test_repeat_wraps_its_body():
    scripts = parse("repeat (10)\nmove (10) steps\nend")
    assert len(scripts) == 1
    (wrap,) = scripts[0].blocks
    assert isinstance(wrap, CWrap)
    assert wrap.shape == "stack"
    header, mouth, end = wrap.contents
    assert header.blockid == "repeat _" and header.shape == "stack"
    assert isinstance(mouth, CMouth) and mouth.category == "control"
    assert [b.blockid for b in mouth.contents] == ["move _ steps"]
    assert (end.flag, end.category, end.pieces) == ("cend", "control", [])


def test_if_else():
    code = "if <mouse down?> then\nsay [yes]\nelse\nsay [no]\nend"
    (wrap,) = parse(code)[0].blocks
    kinds = [type(c).__name__ for c in wrap.contents]
    assert kinds == ["Block", "CMouth", "Block", "CMouth", "Block"]
    assert wrap.contents[2].flag == "celse"
    assert wrap.contents[2].category == "control"
    assert len(wrap.mouths) == 2


def test_nested_blocks_and_capend():
    code = "forever\nif <mouse down?> then\nstop [all v]\nend\nend"
    scripts = parse(code)
    assert len(scripts) == 1
    (outer,) = scripts[0].blocks
    assert outer.shape == "cap"
    inner = outer.mouths[0].contents[0]
    assert isinstance(inner, CWrap)
    assert inner.mouths[0].capend
    assert not outer.mouths[0].capend
    assert scripts[0].is_final


def test_unclosed_blocks_are_force_closed():
    scripts = parse("repeat (3)\nif <touching [edge v]?> then\nturn right (15) degrees")
    assert len(scripts) == 1
    (outer,) = scripts[0].blocks
    assert outer.contents[-1].flag == "cend"
    inner = outer.mouths[0].contents[0]
    assert inner.contents[-1].flag == "cend"
    assert [b.blockid for b in inner.mouths[0].contents] == ["turn @arrow-cw _ degrees"]


def test_blank_line_splits_scripts():
    scripts = parse("move (1) steps\n\nturn right (15) degrees")
    assert [len(s) for s in scripts] == [1, 1]


def test_blank_line_inside_c_block_does_not_split():
    scripts = parse("repeat (2)\nmove (1) steps\n\nmove (2) steps\nend")
    assert len(scripts) == 1
    assert len(scripts[0].blocks[0].mouths[0].contents) == 2


def test_hat_starts_new_script():
    scripts = parse("move (1) steps\nwhen this sprite clicked\nsay [hi]")
    assert [[b.blockid for b in s] for s in scripts] == [
        ["move _ steps"],
        ["when this sprite clicked", "say _"],
    ]


def test_cap_ends_script():
    scripts = parse("stop [all v]\nmove (1) steps")
    assert [len(s) for s in scripts] == [1, 1]
    assert scripts[0].is_final
    assert not scripts[1].is_final


def test_stop_other_scripts_does_not_end_script():
    scripts = parse("stop [other scripts in sprite v]\nmove (1) steps")
    assert [len(s) for s in scripts] == [2]


def test_free_reporter_is_its_own_script():
    scripts = parse("move (1) steps\n(x position)\nturn right (15) degrees")
    assert [len(s) for s in scripts] == [1, 1, 1]
    assert scripts[1].blocks[0].shape == "reporter"


def test_free_comment_is_its_own_script():
    scripts = parse("move (1) steps\n// note\nturn right (15) degrees")
    assert [len(s) for s in scripts] == [1, 1, 1]
    assert isinstance(scripts[1].blocks[0], Comment)


def test_comment_inside_c_block_stays_there():
    (wrap,) = parse("repeat (2)\n// hi\nend")[0].blocks
    assert isinstance(wrap.mouths[0].contents[0], Comment)


def test_stray_else_and_end_are_ordinary_blocks():
    scripts = parse("end\nelse\nmove (1) steps")
    assert len(scripts) == 1
    assert [b.flag for b in scripts[0].blocks] == ["cend", "celse", None]
    assert all(isinstance(b, Block) for b in scripts[0].blocks)


def test_define_hat_starts_script():
    scripts = parse("move (1) steps\ndefine jump\nchange y by (10)")
    assert [len(s) for s in scripts] == [1, 2]
    assert scripts[1].blocks[0].shape == "define-hat"


def test_empty_input():
    assert parse("") == []
    assert parse("\n\n   \n") == []


def test_else_branch_capend():
    code = "if <mouse down?> then\nstop [all v]\nelse\nsay [x]\nend"
    (wrap,) = parse(code)[0].blocks
    assert [m.capend for m in wrap.mouths] == [True, False]


def test_hat_inside_c_block_force_closes():
    scripts = parse("repeat (2)\nmove (1) steps\nwhen flag clicked\nsay [hi]\nend")
    assert [[type(n).__name__ for n in s] for s in scripts] == [
        ["CWrap"],
        ["Block", "Block", "Block"],
    ]
    (wrap,) = scripts[0].blocks
    assert [b.blockid for b in wrap.mouths[0].contents] == ["move _ steps"]
    assert wrap.contents[-1].flag == "cend"
    assert wrap.contents[-1].pieces == []
    hat, say, end = scripts[1].blocks
    assert hat.shape == "hat"
    assert (end.flag, end.shape) == ("cend", "stack")


def test_free_reporter_inside_c_block_force_closes():
    scripts = parse("repeat (2)\nmove (1) steps\n(x position)\nend")
    assert len(scripts) == 3
    assert isinstance(scripts[0].blocks[0], CWrap)
    assert scripts[0].blocks[0].contents[-1].flag == "cend"
    assert scripts[1].blocks[0].shape == "reporter"
    assert scripts[2].blocks[0].flag == "cend"
