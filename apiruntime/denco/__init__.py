"""Double-array URL router with path parameters, and a WSGI multiplexer built on it."""