"""Tests for the pyliterate command line."""

import tempfile
from pathlib import Path

from pyliterate.cli import main

PROGRAM_MD = """\
```python output=hello.py
<<Greeting>>
```

```python title="Greeting"
print("hello")
```
"""

CYCLE_MD = """\
```c output=a.c
<<A>>
```

```c title=A
<<B>>
```

```c title=B
<<A>>
```
"""


class TestTangleCommand:
    def test_tangle_all_documents(self):
        with tempfile.TemporaryDirectory() as d:
            (Path(d) / "prog.md").write_text(PROGRAM_MD)
            assert main(["-C", d, "tangle"]) == 0
            assert 'print("hello")' in (Path(d) / "hello.py").read_text()

    def test_output_dir_and_rename(self):
        with tempfile.TemporaryDirectory() as d:
            md_path = Path(d) / "prog.md"
            md_path.write_text(PROGRAM_MD)
            argv = ["-C", d, "tangle", "-d", "out", "--rename", "hello.py>main.py", str(md_path)]
            assert main(argv) == 0
            assert (Path(d) / "out" / "main.py").exists()
            assert not (Path(d) / "out" / "hello.py").exists()

    def test_relative_file_uses_directory(self):
        with tempfile.TemporaryDirectory() as d:
            (Path(d) / "prog.md").write_text(PROGRAM_MD)
            assert main(["-C", d, "tangle", "prog.md"]) == 0
            assert (Path(d) / "hello.py").exists()

    def test_dry_run(self, capsys):
        with tempfile.TemporaryDirectory() as d:
            (Path(d) / "prog.md").write_text(PROGRAM_MD)
            assert main(["-C", d, "tangle", "-n"]) == 0
            assert "Would perform 1 actions:" in capsys.readouterr().out
            assert not (Path(d) / "hello.py").exists()

    def test_cycle_fails(self, capsys):
        with tempfile.TemporaryDirectory() as d:
            (Path(d) / "cycle.md").write_text(CYCLE_MD)
            assert main(["-C", d, "tangle"]) == 1
            assert "Recursive reference to A" in capsys.readouterr().err
            assert not (Path(d) / "a.c").exists()

    def test_graph(self):
        with tempfile.TemporaryDirectory() as d:
            (Path(d) / "prog.md").write_text(PROGRAM_MD)
            assert main(["-C", d, "tangle", "--graph"]) == 0
            assert (Path(d) / "prog-lp.dot").read_text().startswith('digraph "prog"')


class TestWeaveCommand:
    def test_weave_to_file(self):
        with tempfile.TemporaryDirectory() as d:
            md_path = Path(d) / "prog.md"
            md_path.write_text(PROGRAM_MD)
            out_path = Path(d) / "woven.md"
            assert main(["-C", d, "weave", "-o", str(out_path), str(md_path)]) == 0
            woven = out_path.read_text()
            assert '<a id="block-2"></a>**Greeting <span class="right">[↑ hello.py](#block-1)</span>**' in woven

    def test_relative_paths_use_directory(self):
        with tempfile.TemporaryDirectory() as d:
            (Path(d) / "prog.md").write_text(PROGRAM_MD)
            assert main(["-C", d, "weave", "-o", "woven.md", "prog.md"]) == 0
            assert (Path(d) / "woven.md").read_text().startswith('<a id="block-1"></a>')

    def test_missing_file(self, capsys):
        with tempfile.TemporaryDirectory() as d:
            assert main(["-C", d, "weave", str(Path(d) / "missing.md")]) == 1
            assert "Error:" in capsys.readouterr().err


class TestListCommand:
    def test_list(self, capsys):
        with tempfile.TemporaryDirectory() as d:
            md_path = Path(d) / "prog.md"
            md_path.write_text(PROGRAM_MD + "\n```python title=Main\n<<Missing>>\n```\n")
            assert main(["list", str(md_path)]) == 0
            out = capsys.readouterr().out
            assert "Root chunks: 1\n  hello.py (1 blocks)" in out
            assert "Greeting (1 blocks)" in out
            assert "Undefined: 1\n  Missing" in out


def test_no_command(capsys):
    assert main([]) == 0
    assert "usage:" in capsys.readouterr().out
