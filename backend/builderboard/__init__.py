"""BuilderBoard: job applications, decision links and shortlists."""
