"""
Tests for the script detector (tree-sitter TSX grammar).
"""

import pytest

from detect.script import detect_script_features
from test_utils import dedent, ids, make_catalog


class TestNameMatching:
    def test_case_insensitive_identifier(self):
        catalog = make_catalog("myfeature")
        assert ids(detect_script_features("MyFeature();\n", catalog)) == ["myfeature"]
        assert ids(detect_script_features("myfeature();\n", catalog)) == ["myfeature"]

    def test_property_name(self):
        catalog = make_catalog("clipboard")
        source = 'navigator.clipboard.writeText("hi");\n'
        assert ids(detect_script_features(source, catalog)) == ["clipboard"]

    def test_member_object(self):
        catalog = make_catalog("IntersectionObserver")
        source = "const proto = IntersectionObserver.prototype;\n"
        assert ids(detect_script_features(source, catalog)) == ["intersectionobserver"]

    def test_no_match(self):
        catalog = make_catalog("EyeDropper")
        assert detect_script_features("const x = 1 + 2;\n", catalog) == []

    def test_strings_and_comments_do_not_match(self):
        catalog = make_catalog("fetch")
        source = dedent(
            """
            // fetch is mentioned here
            const label = "fetch";
            """
        )
        assert detect_script_features(source, catalog) == []

    def test_local_binding_still_matches(self):
        # Name-only matching: no scope resolution
        catalog = make_catalog("fetch")
        source = dedent(
            """
            function run(fetch) {
              return fetch;
            }
            """
        )
        assert ids(detect_script_features(source, catalog)) == ["fetch"]

    def test_private_class_member(self):
        catalog = make_catalog("fetch")
        source = dedent(
            """
            class A {
              #fetch = 1;
              m() { return this.#fetch; }
            }
            """
        )
        assert ids(detect_script_features(source, catalog)) == ["fetch"]

    def test_statement_label(self):
        catalog = make_catalog("fetch")
        source = dedent(
            """
            fetch: for (;;) {
              break fetch;
            }
            """
        )
        assert ids(detect_script_features(source, catalog)) == ["fetch"]


class TestDedup:
    def test_each_feature_once_in_first_seen_order(self):
        catalog = make_catalog("fetch", "ResizeObserver")
        source = dedent(
            """
            const ro = new ResizeObserver(() => {});
            fetch("/a");
            fetch("/b");
            window.fetch("/c");
            ro.observe(document.body, new ResizeObserver(() => {}));
            """
        )
        assert ids(detect_script_features(source, catalog)) == ["resizeobserver", "fetch"]


class TestGrammarExtensions:
    def test_typescript_annotations(self):
        catalog = make_catalog("ResizeObserver", "AbortController")
        source = dedent(
            """
            export function watch(el: Element, signal: AbortController): ResizeObserver {
              const ro: ResizeObserver = new ResizeObserver(() => {});
              ro.observe(el);
              return ro;
            }
            """
        )
        assert ids(detect_script_features(source, catalog)) == ["abortcontroller", "resizeobserver"]

    def test_jsx_expression(self):
        catalog = make_catalog("structuredClone")
        source = dedent(
            """
            export const View = ({ state }) => <div>{structuredClone(state).title}</div>;
            """
        )
        assert ids(detect_script_features(source, catalog)) == ["structuredclone"]

    def test_jsx_tag_names_are_not_references(self):
        catalog = make_catalog("dialog", "fetch")
        source = dedent(
            """
            export const Modal = () => <dialog open>{fetch}</dialog>;
            """
        )
        assert ids(detect_script_features(source, catalog)) == ["fetch"]

    def test_jsx_member_tag_names_are_not_references(self):
        catalog = make_catalog("Popover", "Menu")
        source = dedent(
            """
            export const V = () => (
              <Menu.Item>
                <Popover.Panel open />
              </Menu.Item>
            );
            """
        )
        assert detect_script_features(source, catalog) == []

    def test_jsx_namespaced_names_are_not_references(self):
        catalog = make_catalog("rect", "href")
        source = dedent(
            """
            export const Icon = () => <svg:rect xlink:href="#a" />;
            """
        )
        assert detect_script_features(source, catalog) == []

    def test_jsx_attribute_values_are_references(self):
        catalog = make_catalog("Popover", "scheduler")
        source = dedent(
            """
            export const V = () => <Popover.Panel onOpen={scheduler.postTask} />;
            """
        )
        assert ids(detect_script_features(source, catalog)) == ["scheduler"]

    def test_module_syntax(self):
        catalog = make_catalog("BroadcastChannel")
        source = dedent(
            """
            import { helper } from "./helper.js";
            export default new BroadcastChannel("sync");
            """
        )
        assert ids(detect_script_features(source, catalog)) == ["broadcastchannel"]


class TestParseFailure:
    @pytest.mark.parametrize(
        "source",
        [
            "function (\n",
            "const = ;\n",
            "if (fetch {\n",
            "<<<>>> fetch\n",
        ],
    )
    def test_invalid_script_yields_nothing(self, source):
        catalog = make_catalog("fetch")
        assert detect_script_features(source, catalog) == []

    def test_empty_source(self):
        assert detect_script_features("", make_catalog("fetch")) == []
