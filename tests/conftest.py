import io

import pytest

from py_table import PyTable


TRADES_CSV = """\
Ref,Date,Code,RawShares,Shares,Price,Info
1,2006-05-02,P,5000,5000,8.6000,2006-08-09-1-I
2,2006-05-03,P,5000,5000,8.4200,2006-08-09-1-I
3,2006-05-04,P,5000,5000,8.4000,2006-08-09-1-I
4,2006-05-10,P,8600,8600,8.0200,2006-08-09-1-D
5,2006-05-12,P,10000,10000,7.2500,2006-08-09-1-D
6,2006-05-12,P,2000,2000,6.7400,2006-08-09-1-I
7,2006-05-16,S,5000,5000,7.0000,2006-08-09-1-I
"""

MORGAN_ORG = """\
#+TBLNAME: morgan_tab
| Ref  |       Date | Code |     Raw | Shares  |   Price | Info    |
|------+------------+------+---------+---------+---------+---------|
|   29 | 2013-05-02 | P    | 795,546 | 795,546 |  1.1850 | ZMPEF1  |
|   30 | 2013-05-02 | P    | 118,186 | 118,186 | 11.8500 | ZMPEF1  |
|   31 | 2013-05-20 | S    |  12,000 |  12,000 | 28.2800 | ZMEAC   |
|   32 | 2013-05-23 | S    |   8,000 |   8,000 | 27.3900 | ZMEAC   |
|------+------------+------+---------+---------+---------+---------|
| Sum  |            |      |         |         |         |         |

Text after the table.
"""


@pytest.fixture
def fruit():
    return PyTable([
        {'a': '5', 'Two words': '20', 'c': '3,123', 'd': 'apple'},
        {'a': '4', 'Two words': '5', 'c': '6,412', 'd': 'orange'},
        {'a': '3', 'Two words': '8', 'c': '$9,888', 'd': 'pear'},
    ])


@pytest.fixture
def apples():
    return PyTable([
        {'a': '5', 'c': '3,123', 'd': 'apple'},
        {'a': '4', 'c': '6,412', 'd': 'orange'},
        {'a': '7', 'c': '1,888', 'd': 'apple'},
    ])


@pytest.fixture
def trades():
    return PyTable.from_csv(io.StringIO(TRADES_CSV))


@pytest.fixture
def morgan():
    return PyTable.from_org(io.StringIO(MORGAN_ORG))


@pytest.fixture
def trades_csv():
    return TRADES_CSV


@pytest.fixture
def morgan_org():
    return MORGAN_ORG
