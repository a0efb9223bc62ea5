# slotter

Request handlers, authentication middleware and per-request context helpers
for a warehouse management backend. The package does not depend on any web
framework. Each handler takes a `slotter.web.Request` and returns a
`slotter.web.Response`. The work is done by service objects that you pass
in when you build a handler.

## Installation

```
pip install .
```

To install the test dependencies as well:

```
pip install ".[test]"
```

## Modules

- `slotter.web`
  - `Request` is a dataclass with these fields: `method`, `path`, `headers`,
    `query`, `body` (bytes) and `context` (a dict).
    - `Request.json()` decodes the body as a JSON object and raises
      `ValueError` if it cannot.
    - `Request.header(name)` looks up a header without regard to case.
  - `Response` holds `status`, `body` and `content_type`.
  - `RequestData` holds `user_id` and `role_id`.
  - `SSEData` holds the queued `messages`.
  - Context helpers:
    - `with_sse_data` and `get_sse_data`
    - `get_request_data`
    - `broadcast_pending(ctx, hub)` calls `hub.broadcast` for each queued
      message, clears the queue and returns the count.
  - `healthz(request)` returns `200` with the text `ok`.
  - `attach_request_context(handler)` wraps a handler so that it receives
    fresh `SSEData` and `ErrorData` in its context.
- `slotter.errordata`
  - `ErrorData` is a message slot with `has_message()`.
  - `with_error_data(ctx)` and `get_error_data(ctx)` put it into a context and
    read it back.
- `slotter.normalization`
  - `parse_input_string` trims whitespace and lower-cases the text.
  - `parse_input_string_opt` does the same and passes `None` through.
- `slotter.logger`
  - `new(mode)` builds a debug-level `Logger` that writes to stderr.
    - `"prod"` or `"production"` selects JSON lines.
    - Any other mode selects tab-separated console lines.
  - `Logger` has these methods: `debug`, `info`, `warn`, `error`, `fatal`,
    `bind` and `sync`.
    - The logging methods take keyword fields.
    - `bind(**fields)` returns a logger that adds those fields to every entry.
    - `fatal` logs, flushes and raises `SystemExit(1)`.
- `slotter.middleware`
  - `extract_token(request)` looks for a token in this order:
    1. the `token` query parameter
    2. a `Bearer` `Authorization` header
    3. a `token` field in a JSON body
  - `AuthMiddleware(log, auth_service, role_repo)` provides two wrappers:
    - `require_auth(handler)`
    - `require_permission(permission, handler)`. It also requires the
      caller's role to grant a permission whose name or permission type
      matches.
- `slotter.handlers`
  - `auth.AuthHandler`
  - `me.MeHandler`
  - `company.MyCompanyHandler`
  - `wms.MyWmsHandler`
  - `invitation.InvitationHandler`
  - `role.RoleHandler`
  - `warehouse.WarehouseHandler`
  - `sse.SSEHandler`

## Example

```python
from slotter.web import Request, healthz

response = healthz(Request())
print(int(response.status), response.body)   # 200 ok
```

## How handlers behave

- A service reports a failure by raising. The handler catches the exception
  and returns the status code for that endpoint with a body of
  `{"error": str(exc)}`.
- `RoleHandler` also checks the request's `ErrorData`. If a service set a
  message there, the handler answers `400` with that message.
- On success, the auth, invitation and role handlers broadcast any SSE
  messages that were queued on the request context.

`AuthMiddleware` calls `auth_service.set_context_from_token(ctx, token)`.
That call must return a context dict in which `get_request_data` finds a
`RequestData` with a non-nil `user_id`.

## What this package does not do

The package contains no HTTP server, router or command to start one. It
has no database or storage layer, and it does not implement any of the
services the handlers call. Those include authentication and token issuing,
users, companies, WMS, roles, invitations and warehouses. It also has no
SSE or websocket hub. Supply all of these yourself and connect the handlers
to the web framework of your choice.

## Running the tests

```
pytest
```