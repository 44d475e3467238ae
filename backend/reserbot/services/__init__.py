# Services package init
"""
ReserBot Backend — Services Layer
===================================

Service Inventory:
    - RecordStore (abstract): persistence contract for reservations
    - SupabaseRecordStore: PostgREST over HTTP with httpx
    - DatabaseRecordStore: async SQLAlchemy on the same table
    - ReservaService: input validation and orchestration of store calls

ReservaService only knows the RecordStore interface; which store backs it
is decided once by the app factory (see reserbot.dependencies).
"""
