from banner_sizes import Size
from template_processor import TemplateProcessor, substitute, update_template_variables

from conftest import REFERENCE_CSS, REFERENCE_HTML, write


def test_named_placeholders_are_replaced_in_any_file():
    result = substitute("w={{width}} h={{ height }}", Size(728, 90))
    assert result == "w=728 h=90"


def test_html_literal_pass():
    html = substitute(REFERENCE_HTML, Size(728, 90), 'html')

    assert 'content="width=728,height=90"' in html
    assert '<title>Ad Banner: 728x90</title>' in html
    assert 'width="728"' in html
    assert 'height="90"' in html
    assert '{{' not in html


def test_html_literal_pass_leaves_prefixed_attributes_alone():
    html = '<div data-width=120 max-width=5 width=300>'
    assert substitute(html, Size(728, 90), 'html') == '<div data-width=120 max-width=5 width=728>'


def test_html_literal_pass_keeps_quoted_attributes():
    html = '<meta name="ad.size" content="width=300,height=250"><img width="120" height=\'40\'>'
    assert substitute(html, Size(728, 90), 'html') == (
        '<meta name="ad.size" content="width=728,height=90"><img width="120" height=\'40\'>'
    )


def test_css_literal_pass():
    css = substitute(REFERENCE_CSS + "--height: 250px;\n", Size(160, 600), 'css')

    assert '$width: 160px;' in css
    assert '$height: 600px;' in css
    assert '--height: 600px;' in css
    assert 'width: 160px;' in css
    # plain declarations are outside the variable vocabulary
    assert 'max-width: 300px;' in css


def test_literal_patterns_only_apply_to_their_asset_kind():
    css_text = '$width: 300px;'
    assert substitute(css_text, Size(728, 90), 'html') == css_text
    assert substitute('width=300', Size(728, 90), 'css') == 'width=300'


def test_substitution_is_idempotent_at_target_size():
    size = Size(728, 90)
    once = substitute(REFERENCE_HTML, size, 'html')
    assert substitute(once, size, 'html') == once

    css_once = substitute(REFERENCE_CSS, size, 'css')
    assert substitute(css_once, size, 'css') == css_once


def test_update_template_variables_rewrites_in_place(tmp_path):
    path = write(tmp_path / 'index.html', REFERENCE_HTML)

    assert update_template_variables(path, Size(970, 250)) is True
    assert 'width="970"' in path.read_text(encoding='utf-8')
    assert update_template_variables(path, Size(970, 250)) is False


def test_process_banners_uses_directory_names(config):
    write(config.banner_root / '728x90-1/index.html', '<div width="{{width}}" height="{{height}}">')
    write(config.banner_root / '728x90-1/assets/css/source.css', '#ad { width: {{width}}px; }')
    write(config.banner_root / 'odd-name/index.html', '<div width="{{width}}">')
    write(config.banner_root / '_template/index.html', '<div width="{{width}}">')

    updated = TemplateProcessor(config).process_banners()

    assert updated == 3
    assert (config.banner_root / '728x90-1/index.html').read_text() == '<div width="728" height="90">'
    assert (config.banner_root / '728x90-1/assets/css/source.css').read_text() == '#ad { width: 728px; }'
    assert (config.banner_root / 'odd-name/index.html').read_text() == '<div width="300">'
    assert (config.banner_root / '_template/index.html').read_text() == '<div width="{{width}}">'
