"""
Persistance SQLModel.

- database : engine, sessions, creation des tables
- models : tables metadata, media_links, stream_encodings
- repositories : implementations des ports repository
"""
