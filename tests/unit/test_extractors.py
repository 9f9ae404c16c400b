"""Unit tests for the dialect extractors."""

import pytest

from depsniff.core.config import (
    AmdOptions,
    CommonJsOptions,
    CssOptions,
    Es6Options,
    StylesheetOptions,
    TypeScriptOptions,
)
from depsniff.core.exceptions import ParseError
from depsniff.core.models import Dialect
from depsniff.languages import (
    AmdExtractor,
    CommonJsExtractor,
    CssExtractor,
    Es6Extractor,
    LessExtractor,
    SassExtractor,
    StylesheetTree,
    StylusExtractor,
    TypeScriptExtractor,
)
from depsniff.languages.stylesheets import split_targets, strip_comments


def extract(extractor, source: str, options=None) -> list[str]:
    """Parse and extract in one step."""
    if options is None:
        options = CommonJsOptions()
    return extractor.extract(extractor.parse(source), options)


class TestCommonJsExtractor:
    """Tests for require() extraction."""

    def test_requires_in_order(self) -> None:
        """Test that requires are reported in source order."""
        source = "var a = require('./a');\nvar b = require(\"./b\");\n"
        assert extract(CommonJsExtractor(), source) == ["./a", "./b"]

    def test_lazy_requires(self) -> None:
        """Test that requires nested in functions are included."""
        source = """
module.exports = {
  amd: () => require('./amd'),
  es6: function () { return require('./es6'); },
  es7: () => require('./es7'),
};
"""
        assert extract(CommonJsExtractor(), source) == ["./amd", "./es6", "./es7"]

    def test_main_require(self) -> None:
        """Test that require.main.require is reported once."""
        source = "var b = require.main.require('./b');"
        assert extract(CommonJsExtractor(), source) == ["./b"]

    def test_skips_dynamic_arguments(self) -> None:
        """Test that non-literal requires are skipped."""
        source = "var name = './x';\nrequire(name);\nrequire('./a' + name);\nrequire(`./t`);"
        assert extract(CommonJsExtractor(), source) == ["./t"]

    def test_escape_sequences(self) -> None:
        """Test that escapes in string literals are decoded."""
        source = (
            "require('./a\\'b');\n"
            'require("./c\\\\d");\n'
            "require('./\\x65\\u0066\\u{67}');\n"
        )
        assert extract(CommonJsExtractor(), source) == ["./a'b", "./c\\d", "./efg"]

    def test_keeps_duplicates(self) -> None:
        """Test that duplicates are preserved as written."""
        source = "require('./a');\nrequire('./a');"
        assert extract(CommonJsExtractor(), source) == ["./a", "./a"]

    def test_ignores_imports(self) -> None:
        """Test that ES module syntax is not reported."""
        assert extract(CommonJsExtractor(), "import x from 'lib';") == []

    def test_syntax_error(self) -> None:
        """Test that malformed source raises ParseError."""
        with pytest.raises(ParseError):
            CommonJsExtractor().parse("function( {")


class TestAmdExtractor:
    """Tests for define()/require() extraction."""

    def test_define_dependencies(self) -> None:
        """Test the dependency array form."""
        source = "define(['./a', './b'], function (a, b) {});"
        assert extract(AmdExtractor(), source, AmdOptions()) == ["./a", "./b"]

    def test_named_module(self) -> None:
        """Test the named module form."""
        source = "define('mod', ['./a'], function (a) {});"
        assert extract(AmdExtractor(), source, AmdOptions()) == ["./a"]

    def test_driver_script(self) -> None:
        """Test a top-level require([...], callback)."""
        source = "require(['./a', './b'], function (a, b) {});"
        assert extract(AmdExtractor(), source, AmdOptions()) == ["./a", "./b"]

    def test_commonjs_wrapper(self) -> None:
        """Test the define(function (require) {...}) form."""
        source = """
define(function (require) {
  var a = require('./a');
  var b = require('./b');
});
"""
        assert extract(AmdExtractor(), source, AmdOptions()) == ["./a", "./b"]
        assert extract(AmdExtractor(), source, AmdOptions(skip_lazy_loaded=True)) == [
            "./a",
            "./b",
        ]

    def test_lazy_loaded(self) -> None:
        """Test that lazily loaded requires honor skip_lazy_loaded."""
        source = """
define(['./a'], function (a) {
  function later() {
    require('./lazy');
  }
  return later;
});
"""
        assert extract(AmdExtractor(), source, AmdOptions()) == ["./a", "./lazy"]
        assert extract(AmdExtractor(), source, AmdOptions(skip_lazy_loaded=True)) == ["./a"]

    def test_removes_duplicates(self) -> None:
        """Test that AMD results are deduplicated."""
        source = "define(['./a'], function (a) { require('./a'); });"
        assert extract(AmdExtractor(), source, AmdOptions()) == ["./a"]

    def test_no_dependencies(self) -> None:
        """Test define with only a factory."""
        source = "define(function () { return {}; });"
        assert extract(AmdExtractor(), source, AmdOptions()) == []


class TestEs6Extractor:
    """Tests for ES module extraction."""

    def test_import_forms(self) -> None:
        """Test default, named, namespace and side-effect imports."""
        source = """
import x from 'lib';
import { a, b as c } from './named';
import * as ns from './ns';
import './side-effect';
"""
        assert extract(Es6Extractor(), source, Es6Options()) == [
            "lib",
            "./named",
            "./ns",
            "./side-effect",
        ]

    def test_reexports(self) -> None:
        """Test export ... from."""
        source = "export { x } from './x';\nexport * from './y';\nexport default 1;"
        assert extract(Es6Extractor(), source, Es6Options()) == ["./x", "./y"]

    def test_dynamic_import(self) -> None:
        """Test import() with a literal argument."""
        source = "const load = () => import('./bar');\nimport(someVariable);"
        assert extract(Es6Extractor(), source, Es6Options()) == ["./bar"]

    def test_jsx(self) -> None:
        """Test that JSX does not get in the way."""
        source = """
import Thing from './es6NoImport';

export default function App() {
  return <Thing prop="x">text</Thing>;
}
"""
        assert extract(Es6Extractor(), source, Es6Options()) == ["./es6NoImport"]

    def test_newer_syntax(self) -> None:
        """Test class fields, async functions and spread."""
        source = """
import lib from 'lib';

class Foo {
  static bar = 1;
  async run() { const { a, ...rest } = await lib(); return rest; }
}
"""
        assert extract(Es6Extractor(), source, Es6Options()) == ["lib"]

    def test_ignores_requires(self) -> None:
        """Test that CommonJS requires are not reported."""
        source = "import a from './a';\nconst b = require('./b');"
        assert extract(Es6Extractor(), source, Es6Options()) == ["./a"]


class TestTypeScriptExtractor:
    """Tests for TypeScript extraction."""

    SOURCE = """
import fs from 'fs';
import { x } from 'lib';
import * as bar from './bar';
import './my-module.js';
import zip = require('./ZipCodeValidator');

export interface Shape { area(): number; }
const y: number = 1;
"""

    def test_imports(self) -> None:
        """Test all TypeScript import forms."""
        result = extract(TypeScriptExtractor(), self.SOURCE, TypeScriptOptions())
        assert result == ["fs", "lib", "./bar", "./my-module.js", "./ZipCodeValidator"]

    def test_type_imports(self) -> None:
        """Test that skip_type_imports drops import type declarations."""
        source = "import type { Foo } from './types';\nimport { bar } from './bar';"
        extractor = TypeScriptExtractor()

        assert extract(extractor, source, TypeScriptOptions()) == ["./types", "./bar"]
        assert extract(extractor, source, TypeScriptOptions(skip_type_imports=True)) == ["./bar"]

    def test_mixed_imports(self) -> None:
        """Test that mixed_imports adds requires in source order."""
        source = "import a from './a';\nconst b = require('./b');\nimport c from './c';"
        extractor = TypeScriptExtractor()

        assert extract(extractor, source, TypeScriptOptions()) == ["./a", "./c"]
        assert extract(extractor, source, TypeScriptOptions(mixed_imports=True)) == [
            "./a",
            "./b",
            "./c",
        ]

    def test_tsx(self) -> None:
        """Test the tsx grammar."""
        source = "import Foo from './none';\nconst el = <Foo bar={1} />;\nexport default el;"
        extractor = TypeScriptExtractor(tsx=True)

        assert extractor.dialect is Dialect.TSX
        assert extract(extractor, source, TypeScriptOptions()) == ["./none"]

    def test_syntax_error(self) -> None:
        """Test that malformed TypeScript raises ParseError."""
        with pytest.raises(ParseError):
            TypeScriptExtractor().parse("import { x from 'lib'\nclass {")


class TestCssExtractor:
    """Tests for CSS and SCSS extraction."""

    def test_css_imports(self) -> None:
        """Test quoted and url() imports, with media queries."""
        source = """
@import "foo.css";
@import url("baz.css");
@import url(bla.css) screen;
@import 'another.css' print;

body { color: red; }
"""
        assert extract(CssExtractor(Dialect.CSS), source, CssOptions()) == [
            "foo.css",
            "baz.css",
            "bla.css",
            "another.css",
        ]

    def test_css_url_option(self) -> None:
        """Test that url() references are reported only on request."""
        source = '@import "a.css";\n.logo { background: url("logo.png"); }\n'
        extractor = CssExtractor(Dialect.CSS)

        assert extract(extractor, source, CssOptions()) == ["a.css"]
        assert extract(extractor, source, CssOptions(url=True)) == ["a.css", "logo.png"]

    def test_css_ignores_comments(self) -> None:
        """Test that commented-out imports are ignored."""
        source = '/* @import "old.css"; */\n@import "new.css";\n'
        assert extract(CssExtractor(Dialect.CSS), source, CssOptions()) == ["new.css"]

    def test_scss_imports(self) -> None:
        """Test scss imports."""
        source = '@import "_foo";\n@import "baz.scss";\n.a { color: $red; }\n'
        assert extract(CssExtractor(Dialect.SCSS), source, StylesheetOptions()) == [
            "_foo",
            "baz.scss",
        ]

    def test_scss_use(self) -> None:
        """Test scss @use."""
        source = '@use "config";\n.a { color: red; }\n'
        assert extract(CssExtractor(Dialect.SCSS), source, StylesheetOptions()) == ["config"]

    def test_rejects_other_dialects(self) -> None:
        """Test that CssExtractor only handles css and scss."""
        with pytest.raises(ValueError):
            CssExtractor(Dialect.LESS)


class TestStylesheetScanners:
    """Tests for the sass, less and stylus scanners."""

    def test_sass(self) -> None:
        """Test bare, quoted and comma-separated Sass imports."""
        source = """
@import _foo
// @import commented
@use "sass:math"
@forward 'src/list' hide list-reset
@import a, b

.a
  color: red
"""
        tree = SassExtractor().parse(source)

        assert isinstance(tree, StylesheetTree)
        assert SassExtractor().extract(tree, StylesheetOptions()) == [
            "_foo",
            "sass:math",
            "src/list",
            "a",
            "b",
        ]
        assert [s.keyword for s in tree.statements] == ["import", "use", "forward", "import"]

    def test_less(self) -> None:
        """Test Less import options and url()."""
        source = """
@import (reference) "_foo";
@import url("_bar.css");
@import 'baz.less';
/* @import "ignored.less"; */
@color: red;
"""
        tree = LessExtractor().parse(source)

        assert LessExtractor().extract(tree, StylesheetOptions()) == [
            "_foo",
            "_bar.css",
            "baz.less",
        ]
        assert tree.statements[0].options == "reference"

    def test_stylus(self) -> None:
        """Test Stylus @import and @require."""
        source = """
@import "mystyles"
@require 'styles2.styl'
@import styles3.styl
@require "styles4"
// @import "commented"
body
  color red
"""
        assert StylusExtractor().extract(StylusExtractor().parse(source), StylesheetOptions()) == [
            "mystyles",
            "styles2.styl",
            "styles3.styl",
            "styles4",
        ]

    def test_statement_lines(self) -> None:
        """Test that line numbers survive comment stripping."""
        source = "/* one\ntwo */\n@import 'x'"
        tree = StylusExtractor().parse(source)

        assert tree.statements[0].line == 3

    def test_split_targets(self) -> None:
        """Test splitting that respects quotes and parentheses."""
        assert split_targets("'a,b', url(\"c,d\"), e") == ["a,b", "c,d", "e"]
        assert split_targets("'x' with ($a: 1, $b: 2)") == ["x"]

    def test_strip_comments_keeps_urls(self) -> None:
        """Test that protocol slashes are not treated as comments."""
        assert strip_comments('@import url("http://x/y.css") // note') == (
            '@import url("http://x/y.css") '
        )

    def test_protocol_relative_url(self) -> None:
        """Test that // inside a quoted url() is not a comment."""
        source = (
            '@import (css) url("//fonts.googleapis.com/css?family=Open+Sans");\n'
            '@import "b.less";\n'
            "@import '//cdn.example.com/c.less'; // trailing note\n"
        )
        tree = LessExtractor().parse(source)

        assert LessExtractor().extract(tree, StylesheetOptions()) == [
            "//fonts.googleapis.com/css?family=Open+Sans",
            "b.less",
            "//cdn.example.com/c.less",
        ]

    def test_glob_import(self) -> None:
        """Test that /* inside a quoted target does not open a comment."""
        source = "@import 'mixins/*'\n/* note */\n@import 'other'\n"
        tree = StylusExtractor().parse(source)

        assert StylusExtractor().extract(tree, StylesheetOptions()) == ["mixins/*", "other"]
        assert [s.line for s in tree.statements] == [1, 3]

    def test_semicolon_inside_quotes(self) -> None:
        """Test that statements are split on semicolons outside quotes only."""
        tree = LessExtractor().parse("@import 'a;b.less'; @import 'c.less';")
        assert tree.targets == ["a;b.less", "c.less"]

    def test_strip_comments_ignores_quoted_markers(self) -> None:
        """Test that comment markers inside strings are kept."""
        assert strip_comments("'/* x */' \"// y\" /* z */") == "'/* x */' \"// y\" "

    def test_rejects_non_text(self) -> None:
        """Test that scanners only read text."""
        with pytest.raises(ParseError):
            LessExtractor().parse(b"@import 'x';")  # type: ignore[arg-type]
