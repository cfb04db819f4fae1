import pytest
from unittest.mock import patch

from waste_sorter.components.result_card import escape_markdown, render_result


@pytest.fixture
def mock_st():
    with patch("waste_sorter.components.result_card.st") as mock_streamlit:
        yield mock_streamlit


def test_model_text_is_rendered_literally(mock_st):
    """Item and explanation from the model must not go through markdown."""
    item = "**bold** [link](http://x)"
    explanation = "# Heading\n- not a list"

    render_result(item=item, category="recycle", explanation=explanation, color="bg-emerald-500", provider="GROQ")

    mock_st.subheader.assert_called_once_with(escape_markdown(item))
    mock_st.text.assert_called_once_with(explanation)
    mock_st.write.assert_not_called()
    for call in mock_st.markdown.call_args_list:
        assert item not in call.args[0]
        assert explanation not in call.args[0]
    mock_st.caption.assert_called_once_with("Analyzed with GROQ")


def test_banner_uses_category_icon_and_color(mock_st):
    render_result(item="apple core", category="compost", explanation="Food scraps.", color="bg-amber-700")

    banner = mock_st.markdown.call_args_list[0].args[0]
    assert "🌱" in banner
    assert "#b45309" in banner
    mock_st.caption.assert_not_called()


@pytest.mark.parametrize(
    "text, expected",
    [
        ("**bold**", r"\*\*bold\*\*"),
        ("[link](http://x)", r"\[link\]\(http://x\)"),
        ("# Plastic bottle", r"\# Plastic bottle"),
        ("glass jar", "glass jar"),
    ],
)
def test_escape_markdown(text, expected):
    assert escape_markdown(text) == expected
