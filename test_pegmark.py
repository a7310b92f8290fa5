from concurrent.futures import ThreadPoolExecutor

import pytest

import pegmark
from pegmark import (NestingError, ReferenceTable, UnknownWriterError,
                     convert, detab_line, expand_tabs, normalize_reference)
from pegmark.blocks import BlockParser, Segment, NESTED_BLOCK
from pegmark.references import ReferenceParser
from pegmark.writers import Writer


def t(markdown, html, **options):
    assert convert(markdown, **options) == html


class RecordingWriter(Writer):
    """ Plain writer that remembers the structural decisions made.
    """

    def __init__(self, **options):
        super(RecordingWriter, self).__init__(**options)
        self.lists = []
        self.links = []

    def bulletlist(self, items, tight):
        self.lists.append(('bullet', tight, list(items)))
        return super(RecordingWriter, self).bulletlist(items, tight)

    def orderedlist(self, items, tight, startnum=1):
        self.lists.append(('ordered', tight, list(items), startnum))
        return super(RecordingWriter, self).orderedlist(items, tight, startnum)

    def link(self, label, url, title):
        self.links.append((label, url, title))
        return label


# LINE NORMALIZER

def test_detab_aligns_to_tab_stop():
    assert detab_line('a\tb') == 'a   b'
    assert detab_line('\tx') == '    x'
    assert detab_line('ab\t\tc') == 'ab' + ' ' * 6 + 'c'
    assert detab_line('no tabs') == 'no tabs'


def test_expand_tabs_appends_blank_line():
    assert expand_tabs('a\tb') == 'a   b\n\n'
    assert expand_tabs('a\n') == 'a\n\n'
    assert expand_tabs('a\r\nb') == 'a\nb\n\n'
    assert expand_tabs('') == '\n\n'


# REFERENCES

def test_normalize_reference():
    assert normalize_reference('Foo Bar') == normalize_reference('foo   bar')
    assert normalize_reference('Foo\n  Bar') == 'foo bar'


def test_prescan_registers_definitions():
    refmap = ReferenceTable()
    ReferenceParser(refmap).parse(expand_tabs(
        'text\n\n[a]: /one "One"\n  [B]: <two> \'Two\'\n[c]:\n/three\n'))
    assert refmap.lookup('A').url == '/one'
    assert refmap.lookup('A').title == 'One'
    assert refmap.lookup('b').url == 'two'
    assert refmap.lookup('b').title == 'Two'
    assert 'c' not in refmap


def test_prescan_skips_definitions_inside_paragraphs():
    refmap = ReferenceTable()
    ReferenceParser(refmap).parse(expand_tabs('text\n[a]: /one\n'))
    assert len(refmap) == 0


def test_last_definition_wins():
    t('[a]\n\n[a]: /one\n[a]: /two',
      '<p><a href="/two">a</a></p>\n')


def test_forward_reference():
    t('[foo][]\n\n[foo]: /url "t"\n',
      '<p><a href="/url" title="t">foo</a></p>\n')


def test_reference_lookup_ignores_case_and_whitespace():
    t('[Foo Bar]\n\n[foo   bar]: /u',
      '<p><a href="/u">Foo Bar</a></p>\n')


def test_reference_with_explicit_tag():
    t('[text] [id]\n\n[id]: /u',
      '<p><a href="/u">text</a></p>\n')


def test_unresolved_reference_is_literal():
    t('[foo][]', '<p>[foo][]</p>\n')
    t('[foo][bar]', '<p>[foo][bar]</p>\n')
    t('![x]', '<p>![x]</p>\n')


def test_reference_tables_are_per_conversion():
    assert convert('[a]\n\n[a]: /u') == '<p><a href="/u">a</a></p>\n'
    assert convert('[a]') == '<p>[a]</p>\n'


# INLINES

def test_code_span_matches_equal_tick_runs():
    t('``a`b``', '<p><code>a`b</code></p>\n')
    t('`` ` ``', '<p><code>`</code></p>\n')
    t('`a', '<p>`a</p>\n')
    t('`<b>`', '<p><code>&lt;b&gt;</code></p>\n')


def test_emphasis_flanking():
    t('a * b*', '<p>a * b*</p>\n')
    t('*a*', '<p><em>a</em></p>\n')
    t('_a_', '<p><em>a</em></p>\n')


def test_strong():
    t('**bold** and __also__',
      '<p><strong>bold</strong> and <strong>also</strong></p>\n')


def test_nested_emphasis():
    t('*a **b** c*', '<p><em>a <strong>b</strong> c</em></p>\n')


def test_unmatched_delimiters_are_literal():
    t('**a', '<p>**a</p>\n')
    t('a ****', '<p>a ****</p>\n')


def test_breaks():
    t('a  \nb', '<p>a<br />\nb</p>\n')
    t('a\nb', '<p>a b</p>\n')


def test_links_and_images():
    t('[a](/u)', '<p><a href="/u">a</a></p>\n')
    t('[a](</my url> "T")', '<p><a href="/my url" title="T">a</a></p>\n')
    t('![alt](/i.png "T")',
      '<p><img src="/i.png" alt="alt" title="T" /></p>\n')
    t('[a](/u(1))', '<p><a href="/u(1)">a</a></p>\n')


def test_autolinks():
    t('<http://x.org>', '<p><a href="http://x.org">http://x.org</a></p>\n')
    t('<me@x.org>', '<p><a href="mailto:me@x.org">me@x.org</a></p>\n')


def test_inline_html_passes_through():
    t('a <span class="x">b</span>', '<p>a <span class="x">b</span></p>\n')


def test_entities():
    t('&copy; &#169; &#xA9;', '<p>&copy; &#169; &#xA9;</p>\n')
    t('AT&T', '<p>AT&amp;T</p>\n')


def test_escapes():
    t('\\*not\\*', '<p>*not*</p>\n')
    t('\\q', '<p>\\q</p>\n')


# BLOCKS

def test_paragraphs():
    t('a\n\nb', '<p>a</p>\n\n<p>b</p>\n')
    t('  indented a little', '<p>indented a little</p>\n')


def test_headings():
    t('# Title #', '<h1>Title</h1>\n')
    t('### Three', '<h3>Three</h3>\n')
    t('Title\n=====', '<h1>Title</h1>\n')
    t('Sub\n---', '<h2>Sub</h2>\n')


def test_heading_takes_following_section():
    t('# A\n\ntext', '<h1>A</h1>\n\n<p>text</p>\n')


def test_containers_wrap_sections():
    t('# A\n\ntext\n\n## B\n\nmore\n\n# C',
      '<div>\n<h1>A</h1>\n\n<p>text</p>\n\n'
      '<div>\n<h2>B</h2>\n\n<p>more</p>\n</div>\n</div>\n\n'
      '<div>\n<h1>C</h1>\n</div>\n',
      containers=True)


def test_blockquote():
    t('> a\n> b', '<blockquote>\n<p>a b</p>\n</blockquote>\n')
    t('> a\nlazy', '<blockquote>\n<p>a lazy</p>\n</blockquote>\n')


def test_nested_blockquote():
    t('> > a',
      '<blockquote>\n<blockquote>\n<p>a</p>\n</blockquote>\n</blockquote>\n')


def test_verbatim():
    t('    code <b>\n\n    more',
      '<pre><code>code &lt;b&gt;\n\nmore\n</code></pre>\n')
    t('\tcode', '<pre><code>code\n</code></pre>\n')


def test_hrule():
    t('* * *\n\ntext', '<hr />\n\n<p>text</p>\n')
    t('---', '<hr />\n')


def test_tight_list():
    t('- a\n- b\n', '<ul>\n<li>a</li>\n<li>b</li>\n</ul>\n')


def test_loose_list():
    t('- a\n\n- b\n', '<ul>\n<li><p>a</p></li>\n<li><p>b</p></li>\n</ul>\n')


def test_list_flags():
    writer = RecordingWriter()
    convert('- a\n- b\n', writer)
    assert writer.lists == [('bullet', True, ['a', 'b'])]

    writer = RecordingWriter()
    convert('- a\n\n- b\n', writer)
    assert [l[1] for l in writer.lists] == [False]


def test_ordered_list_start():
    t('3. a\n4. b', '<ol start="3">\n<li>a</li>\n<li>b</li>\n</ol>\n')
    t('1. a\n2. b', '<ol>\n<li>a</li>\n<li>b</li>\n</ol>\n')
    t('3. a', '<ol>\n<li>a</li>\n</ol>\n', startnum=False)
    t('10. a', '<ol start="10">\n<li>a</li>\n</ol>\n')


def test_bullet_list_followed_by_ordered_list():
    t('- a\n1. b',
      '<ul>\n<li>a</li>\n</ul>\n\n<ol>\n<li>b</li>\n</ol>\n')


@pytest.mark.parametrize('text, ordered, end', [
    ('-   a', False, 4),
    ('-     a', False, 4),
    ('   -   a', False, 4),
    ('1.   a', True, 4),
    ('12.   a', True, 4),
    ('  1.   a', True, 4),
])
def test_marker_gobbles_towards_hanging_indent(text, ordered, end):
    parser = BlockParser(Writer(), ReferenceTable())
    parser.reset(text)
    assert parser.parse_marker(ordered) is not None
    assert parser.pos == end


def test_list_continuation_lines():
    t('- a\n  b\n- c', '<ul>\n<li>a b</li>\n<li>c</li>\n</ul>\n')


def test_nested_list():
    html = convert('- a\n    - b\n- c')
    assert html.startswith('<ul>\n<li>a')
    assert '<ul>\n<li>b</li>\n</ul>' in html
    assert html.endswith('<li>c</li>\n</ul>\n')


def test_loose_item_with_continuation_block():
    html = convert('- a\n\n    more\n\n- b')
    assert '<li><p>a</p>\n\n<p>more</p></li>' in html


def test_display_html_balanced():
    t('<div>\n<div>x</div>\n</div>\n\npara',
      '<div>\n<div>x</div>\n</div>\n\n<p>para</p>\n')
    t('<DIV>a</div>', '<DIV>a</div>\n')
    t('<hr>', '<hr>\n')
    t('<!-- note -->', '<!-- note -->\n')


def test_unknown_tag_is_inline_html():
    t('<span>a</span>', '<p><span>a</span></p>\n')


def test_reference_definition_produces_no_output():
    t('[a]: /u', '\n')


def test_item_segments_parse_separately():
    parser = BlockParser(Writer(), ReferenceTable())
    segment = Segment(NESTED_BLOCK, '- b\n')
    assert segment.kind == NESTED_BLOCK
    assert parser.render_segments([Segment('continuation', 'a\n'),
                                   segment]) == 'a\n\nb'


# OPTIONS

def test_blanklines_and_minimize():
    t('a\n\nb', '<p>a</p>\n<p>b</p>\n', blanklines=False)
    t('a\n\nb', '<p>a</p><p>b</p>\n', minimize=True)


# CONVERTER

def test_unknown_writer():
    with pytest.raises(UnknownWriterError):
        convert('x', 'pdf')
    with pytest.raises(UnknownWriterError):
        convert('x', None)


def test_grammar_is_total():
    for text in ['[[[', '***', '<div>', '`', '\\', '&', '- ', '#', '>',
                 '![', '](', '<a href="', '1.', '    ', '\t\t', '_*_*',
                 ']', 'a]]', '[a]]]']:
        assert isinstance(convert(text), str)
        assert isinstance(convert(text, 'tex'), str)


def test_stray_closing_bracket_is_literal():
    t('a] b', '<p>a] b</p>\n')
    t(']', '<p>]</p>\n')


def test_unclosed_block_tags_fail_fast():
    t('<div>' * 200, '<p>' + '<div>' * 200 + '</p>\n')
    t('<div><div></div>', '<p><div><div></div></p>\n')


def test_long_bracket_runs_are_literal():
    t('[' * 3000, '<p>' + '[' * 3000 + '</p>\n')
    t('[a' * 1000 + ']\n\n[a]: /u', '<p>' + '[a' * 999 +
      '<a href="/u">a</a></p>\n')


def test_link_label_stops_at_blank_line():
    t('[a\n\nb](/u)', '<p>[a</p>\n\n<p>b](/u)</p>\n')


def test_unclosed_emphasis_runs_are_literal():
    t('*a ' * 1500, '<p>' + '*a ' * 1500 + '</p>\n')
    t('_a ' * 1500, '<p>' + '_a ' * 1500 + '</p>\n')


def test_emphasis_attempts_are_bounded():
    html = convert('*a ' * 1500 + 'b*')
    assert html.startswith('<p>*a *a ')
    assert html.endswith('b</em></p>\n')


def test_deep_nesting_is_reported():
    with pytest.raises(NestingError):
        convert('>' * 5000 + ' a')


def test_structural_decisions_are_repeatable():
    text = '- [a]\n- b\n\n1. [c][x]\n\n2. d\n\n[a]: /a\n[x]: /x "X"\n'
    first, second = RecordingWriter(), RecordingWriter()
    convert(text, first)
    convert(text, second)
    assert first.lists == second.lists
    assert first.links == second.links == [('a', '/a', ''), ('c', '/x', 'X')]
    assert [l[1] for l in first.lists] == [True, False]


def test_concurrent_conversions_do_not_share_references():
    docs = ['[r]\n\n[r]: /{0}'.format(i) for i in range(40)]
    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(convert, docs))
    for i, html in enumerate(results):
        assert html == '<p><a href="/{0}">r</a></p>\n'.format(i)


def test_version():
    assert pegmark.__version__
