"""Stakeholder communication registers: worker grievances and complaints."""
