"""
HTML writers.
"""

import re

from .base import Writer


class HtmlWriter(Writer):

    @staticmethod
    def in_tags(tag, attrs, contents, selfclosing=False):
        result = '<' + tag
        if attrs:
            for attr in attrs:
                if attr is None:
                    break
                result += u' {0}="{1}"'.format(attr[0], attr[1])

        if contents:
            result += u'>{0}</{1}>'.format(contents, tag)
        elif selfclosing:
            result += u' />'
        else:
            result += u'></{0}>'.format(tag)
        return result

    def escape(self, s, preserve_entities=False):
        if preserve_entities:
            s = re.sub(r'[&](?![#](x[a-f0-9]{1,8}|[0-9]{1,8});|[a-z][a-z0-9]{1,31};)', '&amp;', s, flags=re.I)
        else:
            s = re.sub(r'[&]', '&amp;', s)
        s = re.sub(r'[<]', '&lt;', s)
        s = re.sub(r'[>]', '&gt;', s)
        s = re.sub(r'["]', '&quot;', s)
        return s

    def string(self, s):
        return self.escape(s)

    def code(self, s):
        return self.in_tags('code', [], self.escape(s))

    def linebreak(self):
        return self.in_tags('br', [], '', True) + '\n'

    def emphasis(self, s):
        return self.in_tags('em', [], s)

    def strong(self, s):
        return self.in_tags('strong', [], s)

    def link(self, label, url, title):
        attrs = [['href', self.escape(url, True)]]
        if title:
            attrs.append(['title', self.escape(title, True)])
        return self.in_tags('a', attrs, label)

    def image(self, label, url, title):
        # The label is already rendered; keep its text for the alt attribute.
        attrs = [
            ['src', self.escape(url, True)],
            ['alt', re.sub(r'<[^>]*>', '', label)],
        ]
        if title:
            attrs.append(['title', self.escape(title, True)])
        return self.in_tags('img', attrs, '', True)

    def inline_html(self, s):
        return s

    def display_html(self, s):
        return s

    def hex_entity(self, s):
        return '&#x{0};'.format(s)

    def dec_entity(self, s):
        return '&#{0};'.format(s)

    def tag_entity(self, s):
        return '&{0};'.format(s)

    def paragraph(self, s):
        return self.in_tags('p', [], s)

    def heading_tag(self, s, level):
        return self.in_tags('h{0}'.format(level), [], s)

    def section(self, body):
        return self.in_tags('div', [], self.containersep + body +
                            self.containersep)

    def heading(self, s, level, contents):
        body = self.heading_tag(s, level)
        if contents:
            body += self.interblocksep + contents
        if self.options['containers']:
            return self.section(body)
        return body

    def blockquote(self, s):
        return self.in_tags('blockquote', [], self.containersep + s +
                            self.containersep)

    def verbatim(self, s):
        return self.in_tags('pre', [], self.in_tags('code', [], self.escape(s)))

    def listitem(self, s):
        return self.in_tags('li', [], s)

    def bulletlist(self, items, tight):
        sep = self.containersep
        return self.in_tags('ul', [], sep + sep.join(items) + sep)

    def orderedlist(self, items, tight, startnum=1):
        attrs = []
        if self.options['startnum'] and startnum != 1:
            attrs.append(['start', str(startnum)])
        sep = self.containersep
        return self.in_tags('ol', attrs, sep + sep.join(items) + sep)

    def hrule(self):
        return self.in_tags('hr', [], '', True)

class Html5Writer(HtmlWriter):

    def section(self, body):
        return self.in_tags('section', [], self.containersep + body +
                            self.containersep)
