"""HTTP and Socket.IO surface of the viewer service."""
