#!/usr/bin/env python3
"""Parse and print AsciiDoc using txtast."""

import sys
sys.path.insert(0, 'src')

from txtast.adoc_txt_ast_converter import parse
from txtast.txt_ast_printer import TxtASTPrinter
from txtast.txt_ast_validator import TxtASTValidator

# The AsciiDoc content to parse
asciidoc_content = r"""// Sample document
[id='getting-started']
= Getting started
Doc Writer <doc@example.com>

Install the package, then run the converter.

== Installation

. Create and activate a virtual environment
. Install in development mode:
+
[source,bash]
----
pip install -e .
----

.Options
[cols="1,2",options="header"]
|===
|Option |Meaning

|--format
|json or tree
|===

NOTE: Comment lines are skipped when locating paragraphs.
"""

tree = parse(asciidoc_content)
TxtASTValidator(asciidoc_content).validate(tree)

printer = TxtASTPrinter()
printer.visit(tree)
