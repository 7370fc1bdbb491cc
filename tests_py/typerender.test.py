import pytest

from docnote_overloads.declarations import ArrayType
from docnote_overloads.declarations import DocComment
from docnote_overloads.declarations import FunctionDeclaration
from docnote_overloads.declarations import KeywordType
from docnote_overloads.declarations import LiteralType
from docnote_overloads.declarations import SourceLocation
from docnote_overloads.declarations import TemplateTag
from docnote_overloads.declarations import TupleType
from docnote_overloads.declarations import TypeParamDef
from docnote_overloads.declarations import TypeRef
from docnote_overloads.declarations import UnionType
from docnote_overloads.exceptions import UnrenderableType
from docnote_overloads.outputs import SectionKind
from docnote_overloads.scoping import TypeParamScope
from docnote_overloads.typerender import HtmlTypeRenderer
from docnote_overloads.typerender import render_type_params

from docnote_overloads_testutils.fixtures import make_ctx


class TestTypeParamScope:

    def test_for_declaration(self):
        """A scope created for a declaration must contain exactly the
        names of its type params.
        """
        function_def = FunctionDeclaration(
            type_params=(TypeParamDef(name='T'), TypeParamDef(name='U')))
        scope = TypeParamScope.for_declaration(function_def)

        assert scope.names == frozenset({'T', 'U'})
        assert 'T' in scope
        assert 'V' not in scope

    def test_extend_does_not_mutate(self):
        """Extending a scope must return a new scope, leaving the
        original untouched.
        """
        scope = TypeParamScope(frozenset({'T'}))
        extended = scope.extend(['U'])

        assert extended.names == frozenset({'T', 'U'})
        assert scope.names == frozenset({'T'})
        assert extended is not scope


class TestHtmlTypeRenderer:

    def test_keyword_and_literal(self):
        """Keywords and literals must be rendered verbatim (but
        escaped).
        """
        renderer = HtmlTypeRenderer()
        scope = TypeParamScope()

        assert renderer.render(scope, KeywordType('string')) \
            == '<span>string</span>'
        assert renderer.render(scope, LiteralType('"a&b"')) \
            == '<span>&quot;a&amp;b&quot;</span>'

    def test_type_param_not_linked(self):
        """A reference whose name is in scope must be rendered as a
        type variable, even when a documented symbol shares its name.
        """
        renderer = HtmlTypeRenderer({'T': '/T.html'})

        in_scope = renderer.render(
            TypeParamScope(frozenset({'T'})), TypeRef('T'))
        out_of_scope = renderer.render(TypeParamScope(), TypeRef('T'))

        assert in_scope == '<span class="type-param">T</span>'
        assert out_of_scope == '<a href="/T.html" class="link">T</a>'

    def test_unknown_ref(self):
        """A reference that is neither in scope nor documented must be
        rendered as plain text.
        """
        renderer = HtmlTypeRenderer()
        assert renderer.render(TypeParamScope(), TypeRef('Foo')) \
            == '<span>Foo</span>'

    def test_generic_args(self):
        """Type args must be rendered within angle brackets, using the
        same scope.
        """
        renderer = HtmlTypeRenderer({'Promise': '/Promise.html'})
        rendered = renderer.render(
            TypeParamScope(frozenset({'T'})),
            TypeRef('Promise', (TypeRef('T'),)))

        assert rendered == (
            '<a href="/Promise.html" class="link">Promise</a>'
            + '<span>&lt;</span><span class="type-param">T</span>'
            + '<span>&gt;</span>')

    def test_union_array_tuple(self):
        """Arrays of unions must be parenthesized; tuples must be
        bracketed.
        """
        renderer = HtmlTypeRenderer()
        scope = TypeParamScope()
        union = UnionType((KeywordType('string'), KeywordType('number')))

        assert renderer.render(scope, ArrayType(union)) == (
            '<span>(</span><span>string</span><span> | </span>'
            + '<span>number</span><span>)</span><span>[]</span>')
        assert renderer.render(scope, TupleType(union.members)) == (
            '<span>[</span><span>string</span><span>, </span>'
            + '<span>number</span><span>]</span>')

    def test_colon(self):
        renderer = HtmlTypeRenderer()
        assert renderer.render_colon(TypeParamScope(), KeywordType('void')) \
            == '<span>: </span><span>void</span>'

    def test_unrenderable(self):
        """Anything that isn't a type expression must raise instead of
        being silently dropped.
        """
        with pytest.raises(UnrenderableType):
            HtmlTypeRenderer().render(TypeParamScope(), 'string')  # type: ignore

    def test_type_params_summary(self):
        """The summary must include constraints and defaults, and be
        empty when there are no type params.
        """
        renderer = HtmlTypeRenderer()
        type_params = (
            TypeParamDef(name='T', constraint=KeywordType('string')),
            TypeParamDef(name='U', default=TypeRef('T')))
        scope = TypeParamScope.from_type_params(type_params)

        assert renderer.type_params_summary(scope, ()) == ''
        assert renderer.type_params_summary(scope, type_params) == (
            '<span>&lt;</span><span>T</span><span> extends </span>'
            + '<span>string</span><span>, </span><span>U</span>'
            + '<span> = </span><span class="type-param">T</span>'
            + '<span>&gt;</span>')


class TestRenderTypeParams:

    def test_no_type_params(self):
        """No type params must result in no section."""
        assert render_type_params(
            make_ctx(),
            TypeParamScope(),
            DocComment(),
            (),
            SourceLocation('mod.ts', 1),
            namespace='function_foo_0') is None

    def test_entries(self):
        """Each type param must get an entry, with its doc taken from
        the matching template tag.
        """
        type_params = (
            TypeParamDef(name='T', constraint=KeywordType('string')),
            TypeParamDef(name='U'))
        section = render_type_params(
            make_ctx(),
            TypeParamScope.from_type_params(type_params),
            DocComment(tags=(TemplateTag(name='T', doc='The key.'),)),
            type_params,
            SourceLocation('mod.ts', 1),
            namespace='function_foo_0')

        assert section is not None
        assert section.kind is SectionKind.TYPE_PARAMETERS
        assert section.title == 'Type Parameters'
        t_entry, u_entry = section.entries
        assert t_entry.id == 'function_foo_0_type_params_T'
        assert t_entry.doc == '<p>The key.</p>'
        assert t_entry.type_markup == (
            '<span><span class="font-normal"> extends </span>'
            + '<span>string</span></span>')
        assert u_entry.doc is None
        assert u_entry.type_markup == ''
