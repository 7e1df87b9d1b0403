import csv
import io

from dbest_dashboard.core.exports import build_csv, build_pdf


def test_csv_quotes_only_where_needed_without_trailing_newline():
    content = build_csv(['Name', 'Location'], [['Laptop', 'Room 1, Main'], ['Chair', None]])
    assert content.split('\n') == ['Name,Location', 'Laptop,"Room 1, Main"', 'Chair,']
    assert not content.endswith('\n')


def test_csv_round_trips_embedded_quotes():
    content = build_csv(['Notes'], [['15" monitor']])
    assert list(csv.reader(io.StringIO(content))) == [['Notes'], ['15" monitor']]


def test_csv_keeps_multiline_notes_in_one_record():
    content = build_csv(['Name', 'Notes'], [['Printer', 'Jammed\nNeeds toner'], ['Desk', 'OK']])
    assert content == 'Name,Notes\nPrinter,"Jammed\nNeeds toner"\nDesk,OK'
    assert list(csv.reader(io.StringIO(content)))[1] == ['Printer', 'Jammed\nNeeds toner']


def test_pdf_is_a_pdf_document():
    buffer = build_pdf('INVENTORY REPORT', 'DBEST Inventory System', ['Name', 'Qty'], [['Laptop <b>', 2]],
                       summary=[['Total Items', '1']])
    assert buffer.read(5) == b'%PDF-'
