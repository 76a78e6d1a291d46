from bs4 import BeautifulSoup

from folio.highlight import CodeHighlighter, theme_css


def test_highlights_source_code_blocks():
    html = (
        '<pre class="sourceCode python"><code class="sourceCode python">'
        "def add(a, b):\n    return a + b</code></pre>"
    )
    soup = BeautifulSoup(CodeHighlighter().highlight(html), "html.parser")
    code = soup.find("code")
    assert "highlight" in code["class"]
    assert code.find("span", class_="k").get_text() == "def"
    assert code.get_text().startswith("def add(a, b):")


def test_detects_language_from_content():
    html = (
        '<pre><code class="sourceCode">#!/usr/bin/env python\n'
        "print('hi')</code></pre>"
    )
    soup = BeautifulSoup(CodeHighlighter().highlight(html), "html.parser")
    code = soup.find("code")
    assert "highlight" in code["class"]
    assert code.find("span") is not None


def test_replaces_existing_markup_and_leaves_other_code_alone():
    html = (
        '<p><code>inline</code></p>'
        '<pre><code class="sourceCode python"><span id="cb1-1">'
        '<a href="#cb1-1"></a>x = 1</span></code></pre>'
    )
    soup = BeautifulSoup(CodeHighlighter().highlight(html), "html.parser")
    plain, highlighted = soup.find_all("code")
    assert plain.get("class") is None
    assert highlighted.find("a") is None
    assert highlighted.get_text().strip() == "x = 1"


def test_theme_css_is_scoped_to_marker():
    css = theme_css("monokai")
    assert ".highlight .k" in css
