"""Systems for movement, bullets, collisions, rendering and the menu, plus the system manager that runs them."""