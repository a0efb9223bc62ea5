"""Endpoint handlers for auth, the caller, companies, WMS, invitations, roles, warehouses and SSE."""