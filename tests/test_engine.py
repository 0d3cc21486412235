"""
End-to-end tests: Rust source in, findings out.
"""

from typelint.core.config import Config
from typelint.core.engine import ScanEngine


def rule_ids(report):
    return [f.rule_id for f in report.findings]


class TestPatternFindings:
    def test_linked_list_field(self, scan):
        report = scan(
            """
            use std::collections::LinkedList;

            struct Queue {
                items: LinkedList<i32>,
            }
            """
        )
        assert rule_ids(report) == ["LINKEDLIST"]
        location = report.findings[0].location
        assert (location.line, location.column) == (4, 12)
        assert location.snippet == "items: LinkedList<i32>,"

    def test_borrowed_box_parameter(self, scan):
        report = scan("fn show(value: &Box<u32>) {}\n")
        assert rule_ids(report) == ["BORROWED_BOX"]
        assert report.findings[0].suggestion == "&u32"

    def test_rc_box_reference_reports_once(self, scan):
        report = scan(
            """
            use std::rc::Rc;

            struct Cache {
                entry: Rc<Box<&'static u8>>,
            }
            """
        )
        assert rule_ids(report) == ["REDUNDANT_ALLOCATION"]
        assert report.findings[0].message == "usage of `Rc<Box<T>>`"
        assert report.findings[0].suggestion == "Rc<&'static u8>"

    def test_trait_impl_signatures_are_not_walked(self, scan):
        report = scan(
            """
            trait Load {
                fn load(&self) -> Box<Vec<u8>>;
            }

            struct File;

            impl Load for File {
                fn load(&self) -> Box<Vec<u8>> {
                    Box::new(Vec::new())
                }
            }
            """
        )
        assert rule_ids(report) == ["BOX_VEC"]
        assert report.findings[0].location.line == 2

    def test_local_bindings_have_no_path_findings(self, scan):
        report = scan(
            """
            fn build() {
                let data: Box<Vec<u8>> = Box::new(Vec::new());
            }
            """
        )
        assert rule_ids(report) == []

    def test_vec_box_threshold(self, scan):
        report = scan(
            """
            struct Small { items: Vec<Box<u64>> }
            struct Large { items: Vec<Box<[u8; 4096]>> }
            struct Edge { items: Vec<Box<[u8; 4095]>> }
            """
        )
        assert rule_ids(report) == ["VEC_BOX", "VEC_BOX"]
        assert [f.location.line for f in report.findings] == [1, 3]

    def test_statics_are_only_scored(self, scan):
        assert rule_ids(scan("static TABLE: Option<Option<u8>> = None;\n")) == []

    def test_macro_types_are_skipped(self, scan):
        assert rule_ids(scan("struct S { a: wrapped!(Box<Vec<u8>>) }\n")) == []

    def test_closure_parameter_types(self, scan):
        report = scan(
            """
            fn lengths(items: Vec<u8>) {
                apply(items, |v: Box<Vec<u8>>| v.len());
            }
            """
        )
        assert rule_ids(report) == ["BOX_VEC"]
        assert report.findings[0].location.line == 2

    def test_untyped_closure_parameters_are_ignored(self, scan):
        assert rule_ids(scan("fn f() { apply(|v| v.len()); }\n")) == []

    def test_rc_string(self, scan):
        report = scan("use std::sync::Arc;\nfn share(name: Arc<String>) {}\n")
        assert rule_ids(report) == ["RC_BUFFER"]
        assert report.findings[0].suggestion == "Arc<str>"


class TestComplexityFindings:
    def test_deeply_nested_type(self, scan):
        report = scan("fn f(x: Vec<Vec<Vec<Vec<Vec<Vec<u8>>>>>>) {}\n")
        assert rule_ids(report) == ["TYPE_COMPLEXITY"]
        assert report.findings[0].message == (
            "very complex type used. Consider factoring parts into `type` definitions"
        )

    def test_threshold_override(self, scan):
        source = "static X: Vec<u8> = Vec::new();\n"
        assert rule_ids(scan(source)) == []
        assert rule_ids(scan(source, thresholds={"type_complexity_threshold": 10})) == ["TYPE_COMPLEXITY"]

    def test_bindings_in_closure_arguments_are_scored(self, scan):
        report = scan(
            """
            fn f() {
                run(|| {
                    let y: Vec<Vec<Vec<Vec<Vec<Vec<u8>>>>>> = Vec::new();
                });
            }
            """
        )
        assert rule_ids(report) == ["TYPE_COMPLEXITY"]
        assert report.findings[0].location.line == 3

    def test_bindings_in_bound_closures_are_scored(self, scan):
        report = scan(
            """
            fn f() {
                let c = || {
                    let y: Vec<Vec<Vec<Vec<Vec<Vec<u8>>>>>> = Vec::new();
                };
            }
            """
        )
        assert rule_ids(report) == ["TYPE_COMPLEXITY"]
        assert report.findings[0].location.line == 3

    def test_local_bindings_are_scored(self, scan):
        report = scan(
            "fn f() {\n    let x: Vec<Vec<Vec<Vec<Vec<Vec<u8>>>>>> = Vec::new();\n}\n"
        )
        assert rule_ids(report) == ["TYPE_COMPLEXITY"]


class TestFiltering:
    SOURCE = """
    struct Queue {
        // typelint:ignore
        items: std::collections::LinkedList<i32>,
    }
    """

    def test_inline_suppression(self, scan):
        report = scan(self.SOURCE)
        assert rule_ids(report) == []
        assert report.suppressed == 1

    def test_disabled_lint(self, scan):
        report = scan(self.SOURCE.replace("// typelint:ignore", ""), rules={"enabled": ["BOX_VEC"]})
        assert rule_ids(report) == []
        assert report.suppressed == 0

    def test_severity_from_config(self, scan):
        report = scan(
            self.SOURCE.replace("// typelint:ignore", ""),
            rules={"severities": {"LINKEDLIST": "High"}},
        )
        assert report.findings[0].severity == "High"


class TestScanPath:
    def test_scans_rust_files_only(self, tmp_path):
        src = tmp_path / "src"
        src.mkdir()
        (src / "lib.rs").write_text("struct S { a: Box<Vec<u8>> }\n", encoding="utf-8")
        (src / "notes.txt").write_text("Box<Vec<u8>>\n", encoding="utf-8")
        target = tmp_path / "target"
        target.mkdir()
        (target / "generated.rs").write_text("struct T { a: Box<Vec<u8>> }\n", encoding="utf-8")

        report = ScanEngine(Config.load(None)).scan(str(tmp_path))
        assert report.files_scanned == 1
        assert rule_ids(report) == ["BOX_VEC"]
        assert report.findings[0].location.path.endswith("lib.rs")

    def test_single_file(self, tmp_path):
        path = tmp_path / "main.rs"
        path.write_text("fn main() {}\n", encoding="utf-8")
        report = ScanEngine().scan(str(path))
        assert report.files_scanned == 1
        assert report.findings == []
