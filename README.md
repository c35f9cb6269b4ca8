# humakit

humakit is a set of small building blocks for writing HTTP APIs in Python. It
uses only the standard library.

## Modules

- `humakit.casing` splits identifiers into words and joins them in another
  style: `split`, `join`, `merge_numbers`, `camel`, `lower_camel`, `snake`,
  `kebab`, plus the part transforms `identity` and `initialism`.
- `humakit.chain` provides `Middlewares`, a list of middleware functions called
  as `fn(ctx, next)`. `Middlewares.handler(endpoint)` folds them around an
  endpoint so that they run in the order they were added.
- `humakit.cookies` parses `Cookie` request headers. `read_cookie(headers, name)`
  returns the first matching `Cookie` or raises `CookieNotFoundError`.
  `read_cookies(headers)` returns all valid cookies. `headers` is a mapping or
  an iterable of `(name, value)` pairs. The lower-level helpers are
  `parse_cookie_lines`, `parse_cookie_value` and `is_cookie_name_valid`.
- `humakit.autoconfig` has the `AutoConfig` and `AutoConfigVar` records for the
  `x-cli-config` OpenAPI extension. Their `to_dict()` methods return the JSON
  form.
- `humakit.flow` is a small router, `Mux`. Patterns use `:name` parameters,
  which may carry a regular expression (`:age|^[0-9]+$`), and a trailing `...`
  wildcard. A route registered for `GET` also answers `HEAD`. Unmatched
  methods get `405` with an `Allow` header, and `OPTIONS` gets `204`.
  Middleware are functions that take a handler and return a handler; those
  added inside `Mux.group` apply only to that group's routes. The `not_found`,
  `method_not_allowed` and `options` handlers can be replaced. `param(request,
  name)` reads a matched value.
- `humakit.conditional` evaluates `If-Match`, `If-None-Match`,
  `If-Modified-Since` and `If-Unmodified-Since` through `Params`.
  `Params.precondition_failed` returns `None` when the request may go ahead.
  Otherwise it returns a `StatusError`: status 304 for reads, or 412 with
  `ErrorDetail` entries once `Params.resolve` has been given a writing method.
  Writing methods are POST, PUT, PATCH and DELETE.
- `humakit.patch` applies JSON Patch (`decode_json_patch`, `apply_json_patch`)
  and JSON Merge Patch (`apply_merge_patch`) documents and raises `PatchError`
  on failure. It also compares JSON values by meaning (`json_equal`), builds a
  schema copy with nothing required (`make_optional_schema`), and derives a
  PATCH name from a GET operation ID (`patch_operation_name`).
- `humakit.api` provides `API`. It holds an OpenAPI document as a dict, body
  `Format`s keyed by content type or suffix, response transformers and
  middleware. Its methods are `unmarshal`, `marshal`, `transform` and
  `use_middleware`. `api_prefix` returns the path of the first server URL that
  has one, and `rewrite_schema_refs` points `#/components/schemas/...`
  references at a schemas path.

## Example

```python
from humakit import casing
from humakit.conditional import Params
from humakit.flow import Mux, Request, param

print(casing.snake("HTTPServer2020"))   # http_server2020

mux = Mux()

def hello(response, request):
    response.write("Hello, " + param(request, "name"))

mux.handle("/hello/:name", hello, "GET")
response = mux.serve(Request("GET", "/hello/world"))
print(response.status, response.body)   # 200 b'Hello, world'

conditions = Params(if_none_match=['"abc"'])
conditions.resolve("GET")
print(conditions.precondition_failed("abc").status)   # 304
```

## What it does not do

humakit does not run a network server. `Mux.serve` dispatches an in-memory
`Request` and returns a `Response`. Nothing registers operations into the
OpenAPI document, generates schemas from Python types, or serves the document,
documentation pages or schemas over HTTP. The patch helpers work on JSON values
only; wiring them into a PATCH endpoint is left to the caller.

## Tests

Install the test extra with `pip install humakit[test]` and run `pytest`.