"""JSON Schemas shipped with tabprofile."""
