"""Encrypted and JSON columns, nullable values and row scanning over DB-API cursors."""