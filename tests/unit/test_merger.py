"""Unit tests for the manifest merger service."""

from pathlib import Path

from manifix.services.merger import ManifestMergerService, merger_args


class TestMergerArgs:
    """Tests for merger rule arguments."""

    def test_app_manifest(self):
        """Test that app merges strip tools declarations."""
        args = merger_args([Path("A.xml"), Path("B.xml")], is_library=False)
        assert args == {
            "args": "--remove-tools-declarations",
            "libs": "--libs A.xml --libs B.xml",
        }

    def test_library_manifest(self):
        """Test that library merges keep tools declarations."""
        args = merger_args([Path("A.xml")], is_library=True)
        assert args["args"] == ""
        assert args["libs"] == "--libs A.xml"

    def test_libs_keep_dependency_order(self):
        """Test one --libs entry per manifest, in the given order."""
        manifests = [Path(f"lib{i}/AndroidManifest.xml") for i in (3, 1, 2)]
        libs = merger_args(manifests, is_library=False)["libs"]
        assert libs.split(" ")[::2] == ["--libs"] * 3
        assert libs.split(" ")[1::2] == [str(p) for p in manifests]

    def test_dollar_in_lib_path(self):
        """Test that a literal $ in a manifest path is escaped for ninja."""
        args = merger_args([Path("out/$x/A.xml")], is_library=True)
        assert args["libs"] == "--libs out/$$x/A.xml"

    def test_no_libs(self):
        """Test that no static libraries give an empty libs argument."""
        assert merger_args([], is_library=False)["libs"] == ""


class TestManifestMergerService:
    """Tests for merger node registration."""

    def test_merge_registers_node(self, ctx, graph):
        """Test the registered node's wiring.

        Verifies input, implicit inputs, output path and the rendered
        merger command line.
        """
        fixed = Path("out/TestApp/manifest_fixer/AndroidManifest.xml")
        libs = [Path("A.xml"), Path("B.xml")]

        merged = ManifestMergerService(graph).merge(ctx, fixed, libs, is_library=False)

        assert merged == Path("out/soong/.intermediates/TestApp/manifest_merger/AndroidManifest.xml")
        node = graph.node_for(merged)
        assert node.rule.name == "manifestMerger"
        assert node.description == "merge manifest"
        assert node.input == fixed
        assert node.implicits == (Path("A.xml"), Path("B.xml"))
        assert node.command() == (
            f"manifest_merger --remove-tools-declarations --main {fixed} "
            f"--libs A.xml --libs B.xml --out {merged}"
        )

    def test_merge_library_command(self, ctx, graph):
        """Test the command line for a library module."""
        merged = ManifestMergerService(graph).merge(
            ctx, Path("in.xml"), [Path("A.xml")], is_library=True
        )
        assert graph.node_for(merged).command() == f"manifest_merger --main in.xml --libs A.xml --out {merged}"

    def test_custom_merger_command(self, make_ctx, graph):
        """Test that the configured merger executable is used."""
        ctx = make_ctx()
        ctx.config.tools.manifest_merger_cmd = "prebuilts/manifest-merger"
        merged = ManifestMergerService(graph).merge(ctx, Path("in.xml"), [], is_library=True)
        node = graph.node_for(merged)
        assert node.rule.command_deps == ("prebuilts/manifest-merger",)
        assert node.command().startswith("prebuilts/manifest-merger --main in.xml")

    def test_dollar_in_lib_path_command(self, ctx, graph):
        """Test that a lib path with a $ reaches the command unchanged."""
        lib = Path("out/$x/A.xml")
        merged = ManifestMergerService(graph).merge(ctx, Path("in.xml"), [lib], is_library=True)
        assert graph.node_for(merged).command() == (
            f"manifest_merger --main in.xml --libs out/$x/A.xml --out {merged}"
        )
