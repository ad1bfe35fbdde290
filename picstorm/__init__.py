"""PicStorm Viewer: a folder image viewer that only processes pixels on request."""
