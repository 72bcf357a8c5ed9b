# flowkit

Building blocks for data-driven integration flows: small activities that
run against an activity context, and plain functions for strings, arrays,
dates, numbers, JSONPath lookups, XML conversion and type coercion.

## Installation

```
pip install flowkit
```

With the test dependencies:

```
pip install "flowkit[test]"
```

## Expression functions

Every function is an ordinary Python function. Bad arguments raise
`ValueError`, `TypeError` or `IndexError` (coercion failures raise
`flowkit.coerce.CoercionError`, a `ValueError`).

```python
from flowkit import arrays, coerce, dates, json_path, number, text_edit, text_query, utils

arrays.append(["Cat", "Dog"], "Mouse")          # ['Cat', 'Dog', 'Mouse']
arrays.get(["Cat", "Dog", "Snake"], 1)          # 'Dog'
arrays.delete(["Cat", "Dog", "Snake"], 2)       # ['Cat', 'Dog']

text_query.concat("a", "b")                     # 'ab'
text_query.index("hello web world", "web")      # 6
text_edit.substring_after("1999/04/01", "/")    # '04/01'
text_edit.substring("abc", 1, -1)               # 'bc'

coerce.coerce_to_type("42", "int")              # 42
coerce.to_bool("true")                          # True

dates.format_datetime("2017-04-12T22:15:09", "yyyy-MM-dd hh:mm:ss")
# '2017-04-12 22:15:09'
dates.format_date("02/08/2017", "yyyymmdd")     # '20170208'

utils.encode_base64(b"Hello, World")            # b'SGVsbG8sIFdvcmxk'
utils.new_uuid()                                # a random version 4 UUID
number.random_int(100)                          # 0 <= n < 100

json_path.path("$.store.book[0].price", data)
```

Modules:

- `flowkit.coerce` – `to_string`, `to_int`, `to_int32`, `to_int64`,
  `to_float32`, `to_float64`, `to_bool`, `to_bytes`, `to_params`,
  `to_object`, `to_array`, `to_type` with the `DataType` enum, and
  `coerce_to_type` for a type given by name.
- `flowkit.arrays` – `append`, `contains`, `count`, `create`, `delete`, `get`.
- `flowkit.text_query` – `concat`, `contains`, `contains_any`, `count`,
  `starts_with`, `ends_with`, `equals`, `equals_ignore_case`, `index`,
  `index_any`, `last_index`, `length`, `match_regex`, `to_float`,
  `to_integer`. Positions and lengths count UTF-8 bytes.
- `flowkit.text_edit` – `repeat`, `replace`, `replace_all`,
  `replace_regex`, `split`, `substring`, `substring_after`,
  `substring_before`, `to_lower`, `to_upper`, `trim`, `trim_left`,
  `trim_right`, `trim_prefix`, `trim_suffix`.
- `flowkit.dates` – `current_date`, `current_datetime`, `current_time`,
  `now`, `format_date`, `format_datetime`, `format_time`, `get_location`.
- `flowkit.utils` – `encode_base64`, `decode_base64`, `new_uuid`.
- `flowkit.number` – `random_int`.
- `flowkit.json_path` – `path`, a JSONPath lookup supporting keys,
  wildcards, indexes, slices, index lists and `?()` filters.
- `flowkit.xml2json` – `convert`, which turns an XML document into a
  dictionary keyed by the root element's name.

The current-time functions and the date parsers use the time zone named
by the `FLOWKIT_DATETIME_LOCATION` environment variable, or UTC when it is
unset or empty; `dates.get_location()` reports which one is in use. Date
layouts are written in reference-time notation (`2006` year, `01` month,
`02` day, `15` hour, `04` minute, `05` second, `-07:00` offset).

## Activities

Each activity has an `eval(ctx)` method that takes an `ActivityContext`
from `flowkit.activity`, reads its inputs there and writes its outputs
there. `eval` returns `True` when done; failures are raised as exceptions,
`ActivityError` for errors an activity reports itself.

```python
from flowkit.activity import ActivityContext
from flowkit.counter import CounterActivity

act = CounterActivity.from_settings({"counterName": "hits", "op": "increment"})
ctx = ActivityContext()
act.eval(ctx)
ctx.get_output("value")   # 1 on a new counter
```

Available activities:

- `NoopActivity`, `ErrorActivity`, `LogActivity` in `flowkit.activity`
- `CounterActivity` in `flowkit.counter` (named counters via `get_counter`)
- `AppDataActivity` in `flowkit.appdata` (shared values via `get_value`
  and `set_value`)
- `ChannelActivity` in `flowkit.channel` (channels via `create_channel`,
  `get_channel`, `start_channels`, `stop_channels`)
- `Xml2JsonActivity` in `flowkit.xml2json`
- `ReplyActivity`, `ReturnActivity`, `MapperActivity` in
  `flowkit.host_activities`
- `SqlQueryActivity` in `flowkit.sqlquery`
- `RestActivity` in `flowkit.rest`

An `ActivityContext` carries an `ActivityHost`, whose `Scope` holds named
values and which records replies (`reply`) and returned values
(`return_result`). The mapping activities take a `mappings` setting whose
values are either literals or references of the form `=$.name` or
`=$.name.field` into the host scope.

`SqlQueryActivity.from_settings(settings, connect)` opens its connection
with `connect(dataSourceName)`, any DB-API connection factory; without
one it uses `sqlite3.connect`. Only SELECT statements are accepted.

`RestActivity` makes its HTTP calls with the standard library and
outputs `status` and `data`; a response with content type
`application/json` is decoded, any other is returned as text.

### SQL statements

`flowkit.sqlstatement.parse_statement` takes a statement with `:name`
parameters and rewrites it for the placeholder style of the database
described by a `flowkit.sqldb` helper:

```python
from flowkit.sqldb import get_db_helper
from flowkit.sqlstatement import parse_statement

stmt = parse_statement(get_db_helper("sqlserver"),
                       "select * from t where a = :foo")
stmt.prepared_sql                     # 'select * from t where a = @foo'
stmt.to_statement_sql({"foo": "x"})   # "select * from t where a = 'x'"
```

## What flowkit does not do

flowkit is a library only. It has no engine that loads flow definitions
and runs them, no triggers or servers that start flows, no expression
language parser (the functions are called directly from Python), and no
command-line tool. Messaging-system publishers and script-execution
activities are not included.