"""
Instruction resolution and cell rendering in PyFormatter.
"""

from datetime import date, datetime
from decimal import Decimal

import pytest

from py_table import AoaFormatter, FormatInstruction, OrgFormatter, PyFormatter, PyTable
from py_table.errors import (
    MalformedInstructionError,
    PyTableKeyError,
    PyTableValueError,
    UnknownKeyError,
    UnknownLocationError,
    UnsupportedValueKindError,
)


def _numeric(text):
    return FormatInstruction.parse(text, 'numeric')


class TestNumericCells:

    def test_round_and_group(self):
        fmt = PyFormatter()
        inst = _numeric('0.2,')
        assert fmt.format_cell(Decimal('123456789.0123'), inst) == '123,456,789.01'
        assert fmt.format_cell(Decimal('-123456789.0123'), inst) == '-123,456,789.01'

    def test_exponent_float_not_grouped(self):
        fmt = PyFormatter()
        assert fmt.format_cell(123456.789e100, _numeric(',')) == '1.23456789e+105'

    def test_plain_numbers(self):
        fmt = PyFormatter()
        assert fmt.format_cell(3123, FormatInstruction()) == '3123'
        assert fmt.format_cell(Decimal('8.6000'), FormatInstruction()) == '8.6000'

    def test_padding(self):
        fmt = PyFormatter()
        assert fmt.format_cell(7, _numeric('3.0')) == '007'
        assert fmt.format_cell(Decimal('7.456'), _numeric('3.2')) == '007.46'

    def test_currency_symbol(self):
        assert PyFormatter().format_cell(9888, _numeric('$,')) == '$9,888.00'
        assert PyFormatter(currency_symbol='€').format_cell(Decimal('2.5'), _numeric('$0.1')) == '€2.5'

    def test_hms(self):
        assert PyFormatter().format_cell(6584, _numeric('H')) == '01:49:44'


class TestOtherCells:

    def test_booleans(self):
        fmt = PyFormatter()
        inst = FormatInstruction.parse('b[Yippers, Nah Sir]', 'boolean')
        assert fmt.format_cell(True, inst) == 'Yippers'
        assert fmt.format_cell(False, inst) == 'Nah Sir'
        assert fmt.format_cell(True, FormatInstruction()) == 'T'

    def test_dates(self):
        fmt = PyFormatter()
        assert fmt.format_cell(date(2013, 5, 2), FormatInstruction()) == '2013-05-02'
        inst = FormatInstruction.parse('d[%d %b %Y]', 'datetime')
        assert fmt.format_cell(date(2013, 5, 2), inst) == '02 May 2013'
        assert fmt.format_cell(datetime(2013, 5, 2, 9, 30), FormatInstruction()) == '2013-05-02 09:30:00'

    def test_nil(self):
        fmt = PyFormatter()
        assert fmt.format_cell(None, FormatInstruction()) == ''
        assert fmt.format_cell(None, FormatInstruction.parse('n[-]', 'nil')) == '-'

    def test_case(self):
        fmt = PyFormatter()
        assert fmt.format_cell('apple', FormatInstruction.parse('U', 'string')) == 'APPLE'
        title = FormatInstruction.parse('t', 'string')
        assert fmt.format_cell('the lord of the rings', title) == 'The Lord of the Rings'

    def test_width_padding(self):
        fmt = PyFormatter()
        assert fmt.format_cell('ab', FormatInstruction.parse('R', 'string'), 5) == '   ab'
        assert fmt.format_cell('ab', FormatInstruction.parse('C', 'string'), 5) == ' ab  '
        assert fmt.format_cell('ab', FormatInstruction(), 5) == 'ab   '

    def test_unsupported_value(self):
        with pytest.raises(UnsupportedValueKindError):
            PyFormatter().format_cell(object(), FormatInstruction())


class TestResolution:

    def test_column_key_beats_type_key(self, fruit):
        fmt = PyFormatter(fruit).format_for('body', numeric='R', c='L')
        assert fmt.instruction_for('body', 'c', 'numeric').alignment == 'left'
        assert fmt.instruction_for('body', 'a', 'numeric').alignment == 'right'

    def test_first_row_layers(self, fruit):
        fmt = PyFormatter(fruit)
        fmt.format_for('body', c='c[blue]')
        fmt.format_for('gfirst', c='c[green]')
        fmt.format_for('bfirst', c='c[red]')
        assert fmt.instruction_for('body', 'c', 'numeric').color == 'blue'
        assert fmt.instruction_for('body', 'c', 'numeric', gfirst=True).color == 'green'
        assert fmt.instruction_for('body', 'c', 'numeric', gfirst=True, bfirst=True).color == 'red'

    def test_first_row_layers_only_apply_to_body(self, fruit):
        fmt = PyFormatter(fruit).format_for('bfirst', c='B')
        assert not fmt.instruction_for('footer', 'c', 'numeric', bfirst=True).bold

    def test_repeated_calls_layer(self, fruit):
        fmt = PyFormatter(fruit).format_for('body', c='B').format_for('body', c='0.2')
        inst = fmt.instruction_for('body', 'c', 'numeric')
        assert inst.bold
        assert inst.post_digits == 2

    def test_format_sets_every_location(self, fruit):
        fmt = PyFormatter(fruit).format(d='U')
        for loc in ('header', 'body', 'footer', 'gfooter'):
            assert fmt.instruction_for(loc, 'd', 'string').case == 'upper'

    def test_unknown_location(self, fruit):
        with pytest.raises(UnknownLocationError):
            PyFormatter(fruit).format_for('middle', c=',')

    def test_unknown_keys_all_named(self, fruit):
        with pytest.raises(UnknownKeyError) as excinfo:
            PyFormatter(fruit).format_for('body', nope=',', zip='B', c=',')
        assert excinfo.value.keys == ('nope', 'zip')

    def test_instruction_parsed_for_column_kind(self, fruit):
        with pytest.raises(MalformedInstructionError):
            PyFormatter(fruit).format_for('body', d='0.2')

    def test_requires_table(self):
        with pytest.raises(PyTableValueError):
            PyFormatter([1, 2])


class TestOutput:

    def test_boolean_and_nil_texts(self):
        tbl = PyTable([{'flag': 't'}, {'flag': 'f'}, {'flag': None}])
        fmt = AoaFormatter(tbl).format(boolean='b[Yippers, Nah Sir]', nil='n[Nothing to see here]')
        assert fmt.output() == [['Flag'], None, ['Yippers'], ['Nah Sir'], ['Nothing to see here']]

    def test_table_footer_labelled_in_first_column(self, fruit):
        fruit.add_sum_footer('c')
        assert fruit.to_aoa({'c': ','}) == [
            ['A', 'Two Words', 'C', 'D'],
            None,
            ['5', '20', '3,123', 'apple'],
            ['4', '5', '6,412', 'orange'],
            ['3', '8', '9,888', 'pear'],
            None,
            ['Total', '', '19,423', ''],
        ]

    def test_aggregated_first_column_hides_label(self, fruit):
        out = AoaFormatter(fruit).footer('Total', 'a', 'c').output()
        assert out[-1] == ['12', '', '19423', '']

    def test_formatter_footers(self, fruit):
        fmt = AoaFormatter(fruit).format(c='0.2')
        fmt.avg_footer('c').max_footer('d')
        out = fmt.output()
        assert out[-3] == ['Average', '', '6474.33', '']
        assert out[-1] == ['Maximum', '', '', 'pear']

    def test_footer_spec_checked(self, fruit):
        with pytest.raises(PyTableKeyError):
            AoaFormatter(fruit).footer('Total', 'nope')
        with pytest.raises(PyTableValueError):
            AoaFormatter(fruit).footer('Total', c='median')

    def test_group_footers(self, apples):
        fmt = AoaFormatter(apples.order_by('d')).sum_gfooter('c')
        assert fmt.output() == [
            ['A', 'C', 'D'],
            None,
            ['5', '3123', 'apple'],
            ['7', '1888', 'apple'],
            None,
            ['Group Total', '5011', ''],
            None,
            ['4', '6412', 'orange'],
            None,
            ['Group Total', '6412', ''],
        ]

    def test_header_only_string_instructions(self, fruit):
        out = fruit.to_aoa({'string': 'U'})
        assert out[0] == ['A', 'TWO WORDS', 'C', 'D']
        assert out[2][3] == 'APPLE'


class TestFirstRowOutput:

    def test_bfirst_marks_only_the_first_body_row(self):
        tbl = PyTable([{'s': 'x'}, {'s': 'y'}])
        out = OrgFormatter(tbl).format_for('body', s='I').format_for('bfirst', s='B').output()
        assert out.splitlines()[2:] == ['| /*x*/ |', '| /y/   |']

    def test_gfirst_marks_first_row_of_each_group(self, apples):
        fmt = AoaFormatter(apples.order_by('d')).format_for('gfirst', d='U')
        assert [row[2] for row in fmt.output()[2:] if row is not None] == ['APPLE', 'apple', 'ORANGE']

    def test_bfirst_beats_gfirst(self, apples):
        fmt = AoaFormatter(apples.order_by('d'))
        fmt.format_for('gfirst', d='U').format_for('bfirst', d='t')
        assert [row[2] for row in fmt.output()[2:] if row is not None] == ['Apple', 'apple', 'ORANGE']


class TestHeaderNamedLikeAKind:

    def test_kind_key_is_not_a_column_key(self):
        tbl = PyTable([{'String': '5', 'd': 'x'}])
        fmt = PyFormatter(tbl).format_for('body', string='B')
        assert not fmt.instruction_for('body', 'string', 'numeric').bold
        assert fmt.instruction_for('body', 'd', 'string').bold

    def test_kind_key_parsed_for_the_kind(self):
        tbl = PyTable([{'String': '5'}])
        with pytest.raises(MalformedInstructionError):
            PyFormatter(tbl).format_for('body', string='0.2')
        assert AoaFormatter(tbl).format(numeric='0.2').output()[2] == ['5.00']
