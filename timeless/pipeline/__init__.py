"""
Conversions around the diary codec.

- payload: JSON shapes of the load/save endpoints and local storage
- json2md: calendar JSON file → diary document
- md2json: diary document → calendar JSON file
- backup: JSON backup envelope and CSV export
- cli: the `timeless` command
"""
