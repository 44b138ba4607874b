"""Multi-tenant Zoom OAuth token broker and meeting-creation proxy."""
