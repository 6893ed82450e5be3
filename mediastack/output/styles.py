class Style:
    regular = 'default'
    info = 'bold cyan'
    context = 'dim'
    good = 'green'
    bad = 'red'
    suspicious = 'yellow'
    mark = 'bold magenta'
    mark_neutral = 'bold'
