"""Higher-level streams built from parsed packets.

:mod:`streams` filters packets by type tag and extracts NumPy arrays of
payload values (e.g. heart rate); :mod:`timesync` pairs device time with host
time from RD/TL/AK exchanges. Neither module does any I/O.
"""
