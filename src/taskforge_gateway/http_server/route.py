from dataclasses import dataclass
from urllib.parse import unquote


@dataclass(frozen=True)
class Route:
    verb: str
    # Path segments starting with ":" are parameters, i.e. "/jobs/:execution_id".
    path: str

    def match(self, verb: str, path: str) -> dict[str, str] | None:
        """Returns the path parameters if the request matches the route, otherwise None.

        A parameter matches exactly one non-empty path segment and is percent-decoded.
        A trailing slash and the query string are ignored.
        Doesn't raise any exceptions.
        """
        if verb != self.verb:
            return None

        path = path.split("?", 1)[0]
        if len(path) > 1 and path.endswith("/"):
            path = path[:-1]

        route_segments: list[str] = self.path.split("/")
        path_segments: list[str] = path.split("/")
        if len(route_segments) != len(path_segments):
            return None

        params: dict[str, str] = {}
        for route_segment, path_segment in zip(route_segments, path_segments):
            if route_segment.startswith(":"):
                if path_segment == "":
                    return None
                params[route_segment[1:]] = unquote(path_segment)
            elif route_segment != path_segment:
                return None
        return params
