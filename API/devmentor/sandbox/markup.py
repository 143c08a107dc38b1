from html.parser import HTMLParser

_DOCUMENT_TAGS = {"html", "head", "body"}


class BodyExtractor(HTMLParser):
    """Detached document: keeps the markup a browser would place inside <body>."""

    def __init__(self):
        super().__init__(convert_charrefs=False)
        self._parts: list[str] = []
        self._in_head = False

    def handle_starttag(self, tag, attrs):
        if tag == "head":
            self._in_head = True
        elif tag == "body":
            self._in_head = False
        elif tag not in _DOCUMENT_TAGS and not self._in_head:
            self._parts.append(self.get_starttag_text() or f"<{tag}>")

    def handle_startendtag(self, tag, attrs):
        if tag not in _DOCUMENT_TAGS and not self._in_head:
            self._parts.append(self.get_starttag_text() or f"<{tag} />")

    def handle_endtag(self, tag):
        if tag == "head":
            self._in_head = False
        elif tag not in _DOCUMENT_TAGS and not self._in_head:
            self._parts.append(f"</{tag}>")

    def handle_data(self, data):
        if not self._in_head:
            self._parts.append(data)

    def handle_entityref(self, name):
        if not self._in_head:
            self._parts.append(f"&{name};")

    def handle_charref(self, name):
        if not self._in_head:
            self._parts.append(f"&#{name};")

    def handle_comment(self, data):
        if not self._in_head:
            self._parts.append(f"<!--{data}-->")

    def body_html(self) -> str:
        return "".join(self._parts).strip()

    def dispose(self) -> None:
        self.reset()
        self._parts.clear()
        self._in_head = False


def preview_markup(source: str) -> str:
    document = BodyExtractor()
    try:
        document.feed(source)
        document.close()
        body = document.body_html()
    finally:
        document.dispose()
    return f"HTML Preview:\n{body or 'Empty HTML'}"
