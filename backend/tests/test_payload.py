"""
PaddyHub Backend: Form Decoding Tests
=====================================
"""

from starlette.datastructures import FormData

from paddyhub.routes.payload import form_to_dict


def test_bracket_keys_become_lists():
    form = FormData([("history[]", "a"), ("history[]", "b"), ("logs[]", "x")])
    assert form_to_dict(form) == {"history": ["a", "b"], "logs": ["x"]}


def test_repeated_plain_keys_become_lists():
    form = FormData([("tag", "wet"), ("tag", "A"), ("tag", "B"), ("lot", "7")])
    assert form_to_dict(form) == {"tag": ["wet", "A", "B"], "lot": "7"}


def test_empty_form():
    assert form_to_dict(FormData()) == {}
