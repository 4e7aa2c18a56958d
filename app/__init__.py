"""PG/hostel property management back end."""
