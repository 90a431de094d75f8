"""
Text, org, terminal and LaTeX output.
"""

import io
import re

import pytest

from py_table import LaTeXFormatter, PyTable, TermFormatter, read_org
from py_table.errors import PyTableValueError
from py_table.formatters.latex import tex_quote
from py_table.formatters.term import _display_width


@pytest.fixture
def tiny():
    return PyTable([{'A': '1', 'B': 'x'}])


class TestText:

    def test_layout(self, tiny):
        assert tiny.to_text() == "+---+---+\n| A | B |\n+---+---+\n| 1 | x |\n+---+---+\n"

    def test_columns_aligned(self, fruit):
        lines = fruit.to_text({'numeric': 'R'}).splitlines()
        assert len({len(line) for line in lines}) == 1
        assert lines[3] == '| 5 |        20 | 3123 | apple  |'

    def test_footer_rules(self, fruit):
        fruit.add_sum_footer('c')
        lines = fruit.to_text().splitlines()
        assert lines[-1].startswith('+-')
        assert lines[-2].startswith('| Total')
        assert lines[-3].startswith('+-')


class TestOrg:

    def test_layout(self, tiny):
        assert tiny.to_org() == "| A | B |\n|---+---|\n| 1 | x |\n"

    def test_bold_widens_column(self, tiny):
        out = tiny.to_org({'string': 'B'})
        assert out == "| *A* | *B* |\n|-----+-----|\n| 1   | *x* |\n"

    def test_bars_escaped(self):
        out = PyTable([{'s': 'a|b'}]).to_org()
        assert r'a\vert{}b' in out

    def test_inactive_timestamps(self):
        out = PyTable([{'d': '2013-05-02'}]).to_org()
        assert '[2013-05-02]' in out

    def test_reads_back(self, morgan):
        again = read_org(io.StringIO(morgan.to_org()))
        assert again.headers == morgan.headers
        assert again.types == morgan.types
        assert again.rows() == morgan.rows()


class TestTerm:

    def test_box_characters(self, tiny):
        assert tiny.to_term().splitlines() == [
            '╒═══╤═══╕',
            '│ A │ B │',
            '├───┼───┤',
            '│ 1 │ x │',
            '╘═══╧═══╛',
        ]

    def test_ascii(self, tiny):
        assert tiny.to_term(unicode=False).splitlines()[0] == '+===+===+'

    def test_bold_is_ansi_and_aligned(self, fruit):
        out = fruit.to_term({'string': 'B'})
        assert '\x1b[1mA\x1b[0m' in out
        assert len({_display_width(line) for line in out.splitlines()}) == 1

    def test_boolean_colors(self):
        tbl = PyTable([{'ok': 'T'}, {'ok': 'F'}])
        out = TermFormatter(tbl).format_for('body', ok='c[green, red]').output()
        assert '\x1b[32mT\x1b[0m' in out
        assert '\x1b[31mF\x1b[0m' in out

    def test_wide_characters(self):
        out = PyTable([{'w': '日本'}, {'w': 'ab'}]).to_term()
        assert len({_display_width(line) for line in out.splitlines()}) == 1

    def test_unknown_color(self, tiny):
        with pytest.raises(PyTableValueError):
            tiny.to_term({'string': 'c[notacolor]'})


class TestLaTeX:

    def test_layout(self, tiny):
        assert tiny.to_latex() == (
            "\\begin{longtable}{ll}\n"
            "A&\nB\\\\\n"
            "\\endhead\n"
            "1&\nx\\\\\n"
            "\\end{longtable}\n"
        )

    def test_alignment_spec(self, tiny):
        assert tiny.to_latex({'numeric': 'R'}).startswith("\\begin{longtable}{rl}\n")

    def test_bold_and_color(self, tiny):
        out = tiny.to_latex({'string': 'Bc[red]'})
        assert '{\\bfseries\\color{red}{A}}' in out

    def test_quoting(self):
        assert tex_quote('50% & $5_x') == '50\\% \\& \\$5\\_x'
        out = PyTable([{'s': "'hi'"}]).to_latex()
        assert "`hi'" in out

    def test_preamble(self):
        assert 'longtable' in LaTeXFormatter.preamble()
        assert re.search(r'xcolor', LaTeXFormatter.preamble())
