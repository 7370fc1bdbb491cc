from docnote_overloads.declarations import DocComment
from docnote_overloads.declarations import ExampleTag
from docnote_overloads.declarations import UnsupportedTag
from docnote_overloads.markup import MarkdownRenderer
from docnote_overloads.markup import jsdoc_body_to_html
from docnote_overloads.markup import name_to_id
from docnote_overloads.markup import render_examples
from docnote_overloads.outputs import SectionKind

from docnote_overloads_testutils.fixtures import make_ctx


class TestNameToId:

    def test_deterministic(self):
        """Identical inputs must always produce identical ids."""
        assert name_to_id('function', 'foo_0') == 'function_foo_0'
        assert name_to_id('function', 'foo_0') \
            == name_to_id('function', 'foo_0')

    def test_spaces(self):
        """Spaces must be encoded, and must not collapse onto
        underscores.
        """
        assert name_to_id('function_foo_0', 'parameters_unnamed 1') \
            == 'function_foo_0_parameters_unnamed-20-1'
        assert name_to_id('function', 'unnamed 1') \
            != name_to_id('function', 'unnamed_1')

    def test_special_chars(self):
        """Characters that aren't DOM-safe must be encoded, and must
        not collapse onto otherwise-identical labels.
        """
        assert name_to_id('function', '$foo') == 'function_-24-foo'
        assert name_to_id('function', '$foo') \
            != name_to_id('function', '_foo')


class TestMarkdownRenderer:

    def test_render(self):
        renderer = MarkdownRenderer()
        assert renderer.render('Hello *world*') \
            == '<p>Hello <em>world</em></p>'

    def test_summary_first_paragraph(self):
        """Summaries must only include the first paragraph."""
        renderer = MarkdownRenderer()
        assert renderer.render_summary('First.\n\nSecond.') \
            == '<p>First.</p>'

    def test_summary_crlf_and_whitespace_lines(self):
        """CRLF line endings and whitespace-only blank lines must still
        end the first paragraph.
        """
        renderer = MarkdownRenderer()
        assert renderer.render_summary('First.\r\n\r\nSecond.') \
            == '<p>First.</p>'
        assert renderer.render_summary('First.\n   \nSecond.') \
            == '<p>First.</p>'

    def test_summary_keeps_fence_whole(self):
        """Blank lines inside a code fence must not cut the summary off
        partway through the fence.
        """
        renderer = MarkdownRenderer()
        summary = renderer.render_summary(
            '```ts\nfoo();\n\nbar();\n```\n\nAfter.')

        assert 'foo();' in summary
        assert 'bar();' in summary
        assert 'After.' not in summary
        assert summary.count('<pre>') == 1


class TestJsdocBodyToHtml:

    def test_missing_body(self):
        """Absent and empty bodies must both result in None."""
        ctx = make_ctx()
        assert jsdoc_body_to_html(ctx, DocComment(), summary=False) is None
        assert jsdoc_body_to_html(
            ctx, DocComment(body=''), summary=True) is None

    def test_summary_vs_full(self):
        ctx = make_ctx()
        doc = DocComment(body='First.\n\nSecond.')
        assert jsdoc_body_to_html(ctx, doc, summary=True) == '<p>First.</p>'
        assert jsdoc_body_to_html(ctx, doc, summary=False) \
            == '<p>First.</p>\n<p>Second.</p>'


class TestRenderExamples:

    def test_no_examples(self):
        """Doc comments without example tags must not get a section,
        even if they have other tags.
        """
        doc = DocComment(tags=(UnsupportedTag(kind='since', value='1.0'),))
        assert render_examples(
            make_ctx(), doc, namespace='function_foo_0') is None

    def test_titles_and_ids(self):
        """A leading non-fence line must become the title; ids must be
        namespaced and indexed.
        """
        doc = DocComment(tags=(
            ExampleTag(doc='Basic usage\n```ts\nfoo(1);\n```'),
            ExampleTag(doc='```ts\nfoo(2);\n```')))
        section = render_examples(
            make_ctx(), doc, namespace='function_foo_0')

        assert section is not None
        assert section.kind is SectionKind.EXAMPLES
        first, second = section.entries
        assert first.id == 'function_foo_0_example_0'
        assert first.title == '<p>Basic usage</p>'
        assert 'foo(1);' in first.body
        assert '<pre><code' in first.body
        assert second.id == 'function_foo_0_example_1'
        assert second.title is None
        assert 'foo(2);' in second.body
