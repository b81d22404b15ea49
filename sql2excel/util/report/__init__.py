"""Report helpers; the Excel template writer lives in :mod:`.excel`."""
