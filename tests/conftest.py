"""Shared fixtures."""
import pytest


SAMPLE_OFP = """\
OPERATIONAL FLIGHT PLAN
EY 0154/04Oct25/VIE-AUH Reg:A6BLA
LOWW/VIE OMAA/AUH   CI 30
ALTN OMDB 0045

TIMES
  OFF BLOCK   2330Z/0130L
  TAKEOFF     2345Z/0145L
  LANDING     0530Z/0930L
  IN          0538Z/0938L

DEPARTURE AIRPORT:
LOWW/VIE WIEN SCHWECHAT
METAR LOWW 042250Z 29012KT 9999 FEW030 12/06 Q1021 NOSIG
ARRIVAL AIRPORT:
OMAA/AUH ABU DHABI
METAR OMAA 050400Z 32010KT 9999 FEW040 31/18 Q1012
TAF OMAA 050300Z 0506/0612 32012KT CAVOK BECMG 0510/0512 VRB03KT

LIDO-NOTAM-BULLETIN
LOWW
A1234/25
VALIDITY: 1OCT25 TILL UFN
TWY B CLSD
OMAA
1A455/25
VALIDITY: 6FEB25 TILL UFN
0400-0700
ILS RWY 31L U/S
1A456/25
01-SEP-25 0000 - 30-SEP-25 2359
RWY 13R/31L CLSD
AIP SUP SX0079/25
CRANE ERECTED NEAR THR 31R
OMDB
AIC AX0002/24
VALIDITY: 1JAN24 - PERM
RWY 12L/30R RESTRICTED
ATC FPL
(FPL-ETD154-IS
"""


@pytest.fixture
def sample_ofp():
    """A complete overnight VIE-AUH OFP with weather and NOTAM bulletin."""
    return SAMPLE_OFP
