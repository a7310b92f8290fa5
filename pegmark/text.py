"""
Character classes, regular expressions and string helpers shared by the
reference prescanner, the inline grammar and the block grammar.

"""

import re
import logging

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


TAB_STOP = 4

SPECIAL_CHARS = '*_`&[]<!\\'
ESCAPABLE = '\\`*_{}[]()+.!<>#-'

SPACING = ' \n\r\t'

ESCAPED_CHAR = r'\\[' + re.escape(ESCAPABLE) + ']'
OPTIONALSPACE = '[ \t]*'
SPNL = '[ \t]*(?:\n[ \t]*)?'
KEYWORD = '[A-Za-z][A-Za-z0-9]*'

# Attribute values must be quoted and may not cross a line.
HTMLATTRIBUTEVALUE = "(?:'[^'\n]*'|\"[^\"\n]*\")"
HTMLATTRIBUTE = '[A-Za-z0-9_-]+' + SPNL + '=' + SPNL + HTMLATTRIBUTEVALUE + SPNL
HTMLCOMMENT = '<!--(?:.|\n)*?-->'
HTMLINSTRUCTION = r'<\?(?:.|\n)*?\?>'

_block_tag_names = [
    'address', 'blockquote', 'center', 'dir', 'div', 'p', 'pre', 'li', 'ol',
    'ul', 'dl', 'dd', 'form', 'fieldset', 'isindex', 'menu', 'noframes',
    'frameset', 'h1', 'h2', 'h3', 'h4', 'h5', 'h6', 'hr', 'script',
    'noscript', 'table', 'tbody', 'tfoot', 'thead', 'th', 'td', 'tr',
]
BLOCK_TAGS = frozenset(_block_tag_names)


def openelt(name=KEYWORD):
    return '<(' + name + ')' + SPNL + '(?:' + HTMLATTRIBUTE + ')*>'


def closeelt(name=KEYWORD):
    return '</(' + name + ')' + SPNL + '>'


def emptyelt(name=KEYWORD):
    return '<(' + name + ')' + SPNL + '(?:' + HTMLATTRIBUTE + ')*/>'


reBlankLine = re.compile('[ \t]*\n')
reBlankLines = re.compile('(?:[ \t]*\n)+')
reNonEmptyLines = re.compile(r'(?:[ \t]*[^ \t\n][^\n]*(?:\n|\Z))+')
reLine = re.compile('[^\n]*\n|[^\n]+\\Z')
reSpnl = re.compile(SPNL)
reOptionalSpace = re.compile(OPTIONALSPACE)
reNonIndentSpace = re.compile(' {0,3}(?![ \t])')
reIndent = re.compile(' {4}| {0,3}\t')
reEscapedChar = re.compile(ESCAPED_CHAR)

reHtmlComment = re.compile(HTMLCOMMENT)
reHtmlInstruction = re.compile(HTMLINSTRUCTION)
reOpenElt = re.compile(openelt())
reCloseElt = re.compile(closeelt())
reEmptyElt = re.compile(emptyelt())
reInlineHtml = re.compile('|'.join([
    emptyelt(), HTMLCOMMENT, HTMLINSTRUCTION, openelt(), closeelt(),
]))


# UTILITY FUNCTIONS
def unescape(s):
    """ Replace backslash escapes with literal characters.
    """
    return reEscapedChar.sub(lambda m: m.group(0)[1], s)


def normalize_reference(s):
    """
    Normalize reference label: drop backslash escapes, collapse runs of
    whitespace to a single space, case fold.

    """
    return re.sub(r'[ \n\r\t]+', ' ', unescape(s)).casefold()


def detab_line(text, tab_stop=TAB_STOP):
    """
    Convert tabs to spaces, aligning each tab to the next absolute
    tab stop of the line.

    """
    if '\t' not in text:
        return text
    result = []
    column = 0
    for c in text:
        if c == '\t':
            width = tab_stop - column % tab_stop
            result.append(' ' * width)
            column += width
        else:
            result.append(c)
            column += 1
    return ''.join(result)


def expand_tabs(text, tab_stop=TAB_STOP):
    """
    Split text into lines, detab each of them and join them again,
    always finishing with an extra blank line.

    """
    lines = re.split(r'\r\n|\n|\r', re.sub(r'(?:\r\n|\n|\r)$', '', text))
    return '\n'.join(detab_line(line, tab_stop) for line in lines) + '\n\n'
