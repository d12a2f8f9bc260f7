# rookweb

Building blocks for a small HTTP server, each usable on its own:

- `rookweb.query_string`: `QueryString` for lookups such as `?foo=bar`,
  lists (`?count[]=a&count[]=b`) and dictionaries (`?mydict[a]=b`), with
  `pop`, `pop_list`, `pop_dict`, `keys` and `clear`; plus `decode` for a
  single percent-encoded value.
- `rookweb.multipart`: parse and dump `multipart/form-data` bodies
  (`Message`, `Part`, `Header`, `get_header_object`).
- `rookweb.messages`: `Request` and `Response` dataclasses with
  case-insensitive headers.
- `rookweb.middleware`: run `before_handle` / `after_handle` chains
  (`call_before_handlers`, `call_after_handlers`, `LocalMiddleware`, `is_global`).
- `rookweb.cors` and `rookweb.utf8`: ready-made `CORSHandler` (with
  `CORSRules`) and `UTF8` middleware.
- `rookweb.settings`: the `LogLevel` enum, static-file defaults and
  `normalize_static_dir`.
- `rookweb.utility`: `base64encode`, `base64encode_urlsafe`, a lenient
  `base64decode`, `sanitize_filename`, `random_alphanum`, `join_path`,
  `string_equals` and `trim`.
- `rookweb.mime_types`: `MIME_TYPES` and `mime_type_for(extension)`.

## Install

    pip install .

## Examples

Query strings:

    from rookweb.query_string import QueryString

    qs = QueryString("/params?foo=blabla&count[]=a&count[]=b&mydict[x]=42")
    qs.get("foo")           # "blabla"
    qs.get_list("count")    # ["a", "b"]
    qs.get_dict("mydict")   # {"x": "42"}

Multipart bodies:

    from rookweb.messages import Request
    from rookweb.multipart import Message

    body = (
        "--XX\r\n"
        'Content-Disposition: form-data; name="field"\r\n'
        "\r\n"
        "value\r\n"
        "--XX--\r\n"
    )
    req = Request(headers={"Content-Type": "multipart/form-data; boundary=XX"}, body=body)
    msg = Message.from_request(req)
    msg.get_part_by_name("field").body   # "value"

Middleware chains with CORS and UTF-8 defaults:

    from rookweb.cors import CORSHandler
    from rookweb.messages import Request, Response
    from rookweb.middleware import call_after_handlers, call_before_handlers
    from rookweb.utf8 import UTF8

    cors = CORSHandler()
    cors.global_rules().origin("https://app.example.com").max_age(600)
    cors.prefix("/public").ignore()

    middlewares = [cors, UTF8()]
    contexts = [CORSHandler.Context(), UTF8.Context()]
    req, res = Request(url="/api"), Response()

    if not call_before_handlers(middlewares, req, res, contexts):
        res.body = "hello"
        call_after_handlers(middlewares, req, res, contexts)

    res.get_header_value("Access-Control-Allow-Origin")  # "https://app.example.com"
    res.get_header_value("Content-Type")                 # "text/plain; charset=utf-8"

`call_before_handlers` returns True when a hook completed the response
(`Response.end()`); the hooks run so far then have their `after_handle`
called in reverse order.

## What this package does not do

There is no HTTP server, socket handling, request parser or router here,
and no command to run: the modules only build and inspect requests,
responses and their parts. Route rules with typed parameters (such as
`/add/<int>/<int>`) are not parsed either.

## Tests

    pip install .[test]
    pytest