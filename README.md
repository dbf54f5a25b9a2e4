# monkit

`monkit` is an in-process monitoring library. It keeps named statistics
sources (meters, boolean values, struct snapshots, gauges and chained
sources) grouped into scopes inside a registry, and reports them as series
keys with named fields and floating point values. A small presentation
layer renders the collected statistics as text or JSON and serves them
through a WSGI application.

The package uses only the standard library and supports Python 3.10 and
later.

## Concepts

- **Registry** (`monkit.registry.Registry`) holds the scopes and trace
  watchers. `scope_named(name)` returns the scope of that name, creating it
  the first time; `scopes()` lists them sorted by name. The module-level
  functions `scope_named`, `scopes` and `stats` work on the shared
  `monkit.registry.DEFAULT` registry.
- **Scope** (`monkit.scope.Scope`) is a named collection of statistics
  sources. Each name in a scope belongs to one kind of source; asking for a
  different kind under a name already in use raises
  `monkit.scope.SourceConflictError`.
- **SeriesKey** (`monkit.stats.SeriesKey`) is a measurement name with a tag
  set (`monkit.tags.TagSet`). Tag sets are immutable: `set`, `set_tags` and
  `set_all` return new sets.
- **StatSource** (`monkit.stats.StatSource`) is anything with a `stats(cb)`
  method that calls `cb(key, field, value)` for each value it reports.
  `monkit.stats.StatSourceFunc` turns a plain function into one.

## Recording values

```python
from monkit.registry import Registry
from monkit.stats import collect

registry = Registry()
storage = registry.scope_named("storage")

uploads = storage.meter("uploads")
uploads.mark(3)             # three uploads happened
storage.event("downloads")  # one download happened

hits = storage.bool_val("cache_hit")
hits.observe(True)
hits.observe(False)

storage.gauge("queue_depth", lambda: 12.0)

for name, value in sorted(collect(registry).items()):
    print(name, value)
```

`collect` flattens any statistics source into a dictionary keyed by the
series in line-protocol form, for example `cache_hit,scope=storage true`.
Every value reported through a scope is tagged with `scope=<scope name>`.

Meters (`monkit.meter.Meter`) report a `rate` over a sliding window and a
running `total`. A background thread advances every meter's window every
ten minutes, but only when the meter has seen events since the last
advance. `Scope.diff_meter` creates a `DiffMeter` that reports the
difference between two meters' rates and totals. Boolean values report
`disposition` (trues minus falses), `false`, `recent` and `true`. Gauges
report their callback's result as `value`; registering a gauge again under
the same name replaces it.

A struct value keeps the most recent dataclass instance passed to
`observe` and reports each of its numeric fields, descending into nested
dataclasses with dotted field names:

```python
from dataclasses import dataclass

@dataclass
class PoolStats:
    open: int
    idle: int

storage.struct_val("pool").observe(PoolStats(open=8, idle=3))
```

The same reporting is available directly through
`monkit.structsource.stat_source_from_struct`. Any statistics source can be
attached to a scope with `Scope.chain`.

## Transforming output

Callback transformers rewrite what a source reports. `DeltaTransformer`
adds a `delta` field after every `total` field it has seen before, holding
the change since the previous report:

```python
from monkit.transform import DeltaTransformer

deltas = registry.with_transformers(DeltaTransformer())
collect(deltas)  # first report: totals only
collect(deltas)  # later reports: totals and deltas
```

`with_transformers` returns a handle on the same scopes and watchers with
the extra transformers applied; the original handle is unchanged.
`monkit.transform.transform_stat_source` applies transformers to any single
source, and `CallbackTransformerFunc` wraps a plain function as a
transformer.

## Traces

`monkit.trace.Trace` carries an id, arbitrary key/value data (`get`, `set`,
`get_all`, `copy_from`), a count of its live spans and a list of
`SpanObserver`s registered with `observe_spans`. Callbacks registered with
`Registry.observe_traces` are called for every trace passed to
`Registry.observe_trace`; both registration calls return a function that
removes the callback or observer again.

## Presenting statistics

`monkit.present.stats` renders a registry:

```python
import io
from monkit.present.stats import stats_text, stats_json

out = io.StringIO()
stats_text(registry, out)
print(out.getvalue())
```

`stats_text` writes one `series field=value` line per value; `stats_json`
writes a JSON list of `[measurement, tags, field, value]` entries.

`monkit.present.path.from_request(registry, path)` maps a request path onto
a writer and content type. It understands `/` (an HTML index), `/stats`,
`/stats/text`, `/stats/old` and `/stats/json`, and raises a
`monkit.present.errs.PresentError` of kind `NOT_FOUND` for anything else.
`monkit.present.webapp.http_app` wraps this in a WSGI application that
answers 404 for unknown paths. It can be mounted in any WSGI server, for
example the standard library's:

```python
from wsgiref.simple_server import make_server
from monkit.present.webapp import http_app

with make_server("127.0.0.1", 8080, http_app(registry)) as server:
    server.serve_forever()
```

Smaller helpers in the same package: `monkit.present.dot.escape_dot_label`
escapes text for dot graph labels, `monkit.present.listing.ListWriter`
streams a JSON list one element at a time, and
`monkit.present.utils.keep_alive` calls a ping function in the background
until stopped.

## What it does not do

The package does not time function calls or create spans on its own, and
it keeps no integer, float or duration distributions and no timers. The
web application serves statistics only: it has no pages listing running
spans or functions and no endpoints that capture traces. There is no
command-line tool; the WSGI application must be mounted in a server of
your choice.