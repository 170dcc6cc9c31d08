import pytest

from mailcampaign.substituter import (
    Substituter,
    TemplateSubstituter,
    template_has_field,
)


def make(template):
    return TemplateSubstituter("dict", template, False)


def test_has_fields_requires_both_delimiters():
    assert make("Hi {{Name}}").has_fields() is True
    assert make("Hi {{Name").has_fields() is False
    assert make("Hi there").has_fields() is False


def test_template_has_field():
    assert template_has_field("x {{Name}} y", "Name") is True
    assert template_has_field("x {{Other}} y", "Name") is False


def test_has_field_method_uses_template():
    substituter = make("Dear {{emailaddress}}")
    assert substituter.has_field("emailaddress") is True
    assert substituter.has_field("Name") is False


def test_substitute_variable():
    name = "Ann"
    result = make("Hello {{Name}}!").substitute({"Name": name})
    assert result == "Hello " + name + "!"


def test_unknown_variable_is_empty():
    assert make("A{{missing}}B").substitute({}) == "AB"


def test_section_hidden_without_field():
    assert make("[{{#x_section}}shown{{/x_section}}]").substitute({}) == "[]"


def test_section_shown_with_field():
    result = make("[{{#x_section}}{{x}}{{/x_section}}]").substitute({"x": "v"})
    assert result == "[v]"


def test_comment_is_removed():
    assert make("a{{! note }}b").substitute({}) == "ab"


def test_html_modifier_escapes():
    result = make("{{v:h}}").substitute({"v": "<b>"})
    assert result == "&lt;b&gt;"


def test_unbalanced_template_returned_unchanged():
    template = "{{#open_section}}text {{Name}}"
    assert make(template).substitute({"Name": "Ann"}) == template


def test_values_persist_between_calls():
    substituter = make("{{a}}-{{b}}")
    substituter.substitute({"a": "1"})
    assert substituter.substitute({"b": "2"}) == "1-2"


def test_plain_text_untouched():
    text = "no fields at all"
    assert make(text).substitute({"x": "y"}) == text


def test_base_class_is_abstract():
    with pytest.raises(TypeError):
        Substituter("d", "t", False)