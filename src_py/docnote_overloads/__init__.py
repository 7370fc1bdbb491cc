from docnote_overloads._assembly import assemble_overload_set
from docnote_overloads._gathering import gather_function_docs
from docnote_overloads.context import RenderContext
from docnote_overloads.markup import RenderConfig
from docnote_overloads.outputs import FunctionDocs
from docnote_overloads.scoping import TypeParamScope

__all__ = [
    'FunctionDocs',
    'RenderConfig',
    'RenderContext',
    'TypeParamScope',
    'assemble_overload_set',
    'gather_function_docs',
]
