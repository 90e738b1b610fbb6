import os
import struct

from vkshader import BuildOutput, SPIRV_MAGIC_NUMBER

from testutils import run_tests
from pytest import raises


WORDS = [SPIRV_MAGIC_NUMBER, 0x00010000, 0, 8, 0, 0x00020011, 1]


def test_build_output_basics():
    out = BuildOutput(("/a.vert", "/b.glsl"), iter(WORDS))
    assert out.sources == ["/a.vert", "/b.glsl"]
    assert out.spv == WORDS
    assert "7 words" in repr(out)
    assert "2 sources" in repr(out)
    assert out == BuildOutput(["/a.vert", "/b.glsl"], WORDS)
    assert out != BuildOutput(["/a.vert"], WORDS)
    assert out != BuildOutput(["/a.vert", "/b.glsl"], WORDS[:-1])


def test_to_bytes():
    out = BuildOutput([], WORDS)
    data = out.to_bytes()
    assert len(data) == 4 * len(WORDS)
    # SpirV files start with the magic number in little endian
    assert data[:4] == b"\x03\x02\x23\x07"
    assert list(struct.unpack(f"<{len(WORDS)}I", data)) == WORDS


def test_to_python():
    out = BuildOutput(["/shaders/a.vert", "/shaders/it's.glsl"], WORDS)
    code = out.to_python()
    assert code.startswith("# Generated by vkshader")
    assert "0x07230203," in code

    namespace = {}
    exec(code, namespace)
    assert namespace["SPIRV"] == tuple(WORDS)
    assert namespace["SOURCES"] == ("/shaders/a.vert", "/shaders/it's.glsl")

    namespace = {}
    exec(BuildOutput([], WORDS).to_python("VERT_SHADER"), namespace)
    assert namespace["VERT_SHADER"] == tuple(WORDS)
    assert namespace["SOURCES"] == ()

    with raises(ValueError):
        out.to_python("not a name")


def test_to_depfile():
    out = BuildOutput(["/src/a.vert", "/src/my dir/b.glsl", "/src/$x#1.glsl"], WORDS)
    text = out.to_depfile("/build/a.spv")
    assert text == "/build/a.spv: /src/a.vert /src/my\\ dir/b.glsl /src/$$x\\#1.glsl\n"

    text = out.to_depfile("/build/a.spv", phony=True)
    lines = text.splitlines()
    assert len(lines) == 4
    assert lines[1] == "/src/a.vert:"

    # An inline shader has no dependencies
    assert BuildOutput([], WORDS).to_depfile("out.spv") == "out.spv:\n"


def test_write(tmp_path):
    out = BuildOutput(["/src/a.vert"], WORDS)

    filename = str(tmp_path / "a.spv")
    depfile = str(tmp_path / "a.d")
    out.write(filename, depfile)
    with open(filename, "rb") as f:
        assert f.read() == out.to_bytes()
    with open(depfile, "rb") as f:
        assert f.read().decode() == out.to_depfile(os.path.abspath(filename))

    filename = str(tmp_path / "a_spv.py")
    out.write(filename, name="A")
    with open(filename, "rb") as f:
        assert f.read().decode() == out.to_python("A")


if __name__ == "__main__":
    run_tests(globals())
